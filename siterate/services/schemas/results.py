"""Result dataclasses returned by engine operations."""

from dataclasses import dataclass
from datetime import date

from siterate.enums import CapBound, StackMode
from siterate.services._types import (
    AppliedRuleDict,
    NightlyRateDict,
    ResolutionDict,
    StayQuoteDict,
)


@dataclass(frozen=True, slots=True)
class AppliedRule:
    """One folded step.

    ``effective`` is False when a max-mode rule lost, or when a later max winner
    or override replaced the rate this step produced.
    """

    rule_id: str
    name: str
    stack_mode: StackMode
    delta_cents: int
    rate_after_cents: int
    effective: bool = True

    def to_dict(self) -> AppliedRuleDict:
        return {
            "ruleId": self.rule_id,
            "name": self.name,
            "stackMode": self.stack_mode.value,
            "deltaCents": self.delta_cents,
            "rateAfterCents": self.rate_after_cents,
            "effective": self.effective,
        }


@dataclass(frozen=True, slots=True)
class Resolution:
    base_rate_cents: int
    final_rate_cents: int
    applied: tuple[AppliedRule, ...] = ()
    min_cap: int | None = None
    max_cap: int | None = None
    capped_at: CapBound | None = None

    @property
    def adjustment_cents(self) -> int:
        return self.final_rate_cents - self.base_rate_cents

    @property
    def is_negative(self) -> bool:
        return self.final_rate_cents < 0

    def to_dict(self) -> ResolutionDict:
        return {
            "baseRateCents": self.base_rate_cents,
            "finalRateCents": self.final_rate_cents,
            "minCap": self.min_cap,
            "maxCap": self.max_cap,
            "cappedAt": self.capped_at.value if self.capped_at else None,
            "applied": [a.to_dict() for a in self.applied],
        }


@dataclass(frozen=True, slots=True)
class NightlyRate:
    night: date
    resolution: Resolution

    def to_dict(self) -> NightlyRateDict:
        return {"night": self.night.isoformat(), "resolution": self.resolution.to_dict()}


@dataclass(frozen=True, slots=True)
class StayQuote:
    arrival: date
    departure: date
    nights: int
    base_subtotal_cents: int
    adjustments_cents: int
    total_cents: int
    nightly: tuple[NightlyRate, ...]
    applied_rule_ids: tuple[str, ...]

    def to_dict(self) -> StayQuoteDict:
        return {
            "arrival": self.arrival.isoformat(),
            "departure": self.departure.isoformat(),
            "nights": self.nights,
            "baseSubtotalCents": self.base_subtotal_cents,
            "adjustmentsCents": self.adjustments_cents,
            "totalCents": self.total_cents,
            "appliedRuleIds": list(self.applied_rule_ids),
            "nightly": [n.to_dict() for n in self.nightly],
        }
