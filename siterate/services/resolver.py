"""Folds matched pricing rules into a single nightly rate."""

from collections.abc import Sequence
from dataclasses import replace
from decimal import Decimal
from typing import assert_never

import structlog

from siterate.enums import AdjustmentType, CapBound, RoundingMode, StackMode
from siterate.services._helpers import round_cents
from siterate.services.errors import CapConflictError
from siterate.services.schemas.results import AppliedRule, Resolution
from siterate.services.schemas.rules import PricingRule

logger = structlog.get_logger(__name__)


class RateResolver:
    """Applies rules in evaluation order, then clamps to the intersected caps.

    additive  compounds on the running rate
    max       keeps the best of (running rate, base + delta)
    override  sets base + delta and stops folding
    """

    def __init__(self, rounding: RoundingMode = RoundingMode.HALF_UP) -> None:
        self.rounding: RoundingMode = rounding

    def delta(self, rule: PricingRule, reference_cents: int) -> int:
        match rule.adjustment_type:
            case AdjustmentType.PERCENT:
                return round_cents(Decimal(reference_cents) * rule.adjustment_value, self.rounding)
            case AdjustmentType.FLAT:
                return round_cents(rule.adjustment_value, self.rounding)
            case _:
                assert_never(rule.adjustment_type)

    def resolve(
        self,
        base_rate_cents: int,
        matched_rules: Sequence[PricingRule],
    ) -> Resolution | CapConflictError:
        accumulator: int = base_rate_cents
        applied: list[AppliedRule] = []
        min_cap: int | None = None
        max_cap: int | None = None
        min_cap_rule: str = ""
        max_cap_rule: str = ""

        for rule in matched_rules:
            step: int
            effective: bool = True
            # True when the new rate is base + delta, discarding every earlier step.
            replaces: bool = False
            match rule.stack_mode:
                case StackMode.ADDITIVE:
                    step = self.delta(rule, accumulator)
                    accumulator += step
                case StackMode.MAX:
                    step = self.delta(rule, base_rate_cents)
                    candidate: int = base_rate_cents + step
                    # The first folded rule has nothing to compete with.
                    if not applied or candidate > accumulator:
                        accumulator, replaces = candidate, True
                    else:
                        effective = False
                case StackMode.OVERRIDE:
                    step = self.delta(rule, base_rate_cents)
                    accumulator, replaces = base_rate_cents + step, True
                case _:
                    assert_never(rule.stack_mode)

            if replaces:
                applied = [replace(a, effective=False) for a in applied]
            applied.append(
                AppliedRule(
                    rule_id=rule.id,
                    name=rule.name,
                    stack_mode=rule.stack_mode,
                    delta_cents=step,
                    rate_after_cents=accumulator,
                    effective=effective,
                )
            )

            if rule.min_rate_cap is not None and (min_cap is None or rule.min_rate_cap > min_cap):
                min_cap, min_cap_rule = rule.min_rate_cap, rule.id
            if rule.max_rate_cap is not None and (max_cap is None or rule.max_rate_cap < max_cap):
                max_cap, max_cap_rule = rule.max_rate_cap, rule.id

            if rule.stack_mode is StackMode.OVERRIDE:
                break

        if min_cap is not None and max_cap is not None and min_cap > max_cap:
            logger.warning(
                "Conflicting rate caps",
                min_cap=min_cap,
                min_cap_rule=min_cap_rule,
                max_cap=max_cap,
                max_cap_rule=max_cap_rule,
            )
            return CapConflictError(min_cap, max_cap, min_cap_rule, max_cap_rule)

        final: int = accumulator
        capped_at: CapBound | None = None
        if min_cap is not None and final < min_cap:
            final, capped_at = min_cap, CapBound.MIN
        elif max_cap is not None and final > max_cap:
            final, capped_at = max_cap, CapBound.MAX
        if capped_at is not None:
            logger.debug("Rate clamped", raw_rate=accumulator, final_rate=final, bound=capped_at.value)

        if final < 0:
            logger.warning(
                "Resolved rate is negative",
                base_rate_cents=base_rate_cents,
                final_rate_cents=final,
                rules=[a.rule_id for a in applied],
            )

        return Resolution(
            base_rate_cents=base_rate_cents,
            final_rate_cents=final,
            applied=tuple(applied),
            min_cap=min_cap,
            max_cap=max_cap,
            capped_at=capped_at,
        )


def resolve(
    base_rate_cents: int,
    matched_rules: Sequence[PricingRule],
) -> Resolution | CapConflictError:
    return RateResolver().resolve(base_rate_cents, matched_rules)
