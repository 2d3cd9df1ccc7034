"""Structural validation of pricing rule drafts."""

from collections.abc import Callable

import structlog

from siterate.services._helpers import new_id
from siterate.services.errors import (
    CapOrderViolation,
    DateOrderViolation,
    InvalidCap,
    InvalidDayOfWeek,
    InvalidMinNights,
    InvalidName,
    InvalidPriority,
    RuleValidationError,
    ZeroAdjustment,
)
from siterate.services.schemas.rules import PricingRule, PricingRuleDraft

logger = structlog.get_logger(__name__)

NAME_MAX_LENGTH = 100
PRIORITY_MIN = 0
PRIORITY_MAX = 999

Check = Callable[[PricingRuleDraft], RuleValidationError | None]


def _check_name(draft: PricingRuleDraft) -> RuleValidationError | None:
    if not draft.name or not draft.name.strip():
        return InvalidName("name", "Name is required")
    if len(draft.name) > NAME_MAX_LENGTH:
        return InvalidName("name", f"Name must be at most {NAME_MAX_LENGTH} characters")
    return None


def _check_priority(draft: PricingRuleDraft) -> RuleValidationError | None:
    if not PRIORITY_MIN <= draft.priority <= PRIORITY_MAX:
        return InvalidPriority(
            "priority", f"Priority must be between {PRIORITY_MIN} and {PRIORITY_MAX}"
        )
    return None


def _check_adjustment(draft: PricingRuleDraft) -> RuleValidationError | None:
    if not draft.adjustment_value.is_finite() or draft.adjustment_value == 0:
        return ZeroAdjustment(
            "adjustment_value", "Adjustment value is required and cannot be zero"
        )
    return None


def _check_caps(draft: PricingRuleDraft) -> RuleValidationError | None:
    if draft.min_rate_cap is not None and draft.min_rate_cap < 0:
        return InvalidCap("min_rate_cap", "Min rate cap must not be negative")
    if draft.max_rate_cap is not None and draft.max_rate_cap < 0:
        return InvalidCap("max_rate_cap", "Max rate cap must not be negative")
    return None


def _check_cap_order(draft: PricingRuleDraft) -> RuleValidationError | None:
    if (
        draft.min_rate_cap is not None
        and draft.max_rate_cap is not None
        and draft.max_rate_cap < draft.min_rate_cap
    ):
        return CapOrderViolation(
            "max_rate_cap", "Max rate cap must be greater than or equal to min rate cap"
        )
    return None


def _check_dates(draft: PricingRuleDraft) -> RuleValidationError | None:
    start, end = draft.start_date, draft.end_date
    if start is not None and end is not None and end < start:
        return DateOrderViolation("end_date", "End date must not be before start date")
    return None


def _check_dow_mask(draft: PricingRuleDraft) -> RuleValidationError | None:
    bad: list[int] = sorted(d for d in draft.dow_mask or () if not 0 <= d <= 6)
    if bad:
        return InvalidDayOfWeek("dow_mask", f"Weekdays must be 0 (Sun) to 6 (Sat), got {bad}")
    return None


def _check_min_nights(draft: PricingRuleDraft) -> RuleValidationError | None:
    if draft.min_nights is not None and draft.min_nights < 1:
        return InvalidMinNights("min_nights", "Minimum nights must be at least 1")
    return None


# Order matters: the first failing check is the one reported.
CHECKS: tuple[Check, ...] = (
    _check_name,
    _check_priority,
    _check_adjustment,
    _check_caps,
    _check_cap_order,
    _check_dates,
    _check_dow_mask,
    _check_min_nights,
)


class RuleValidator:
    """Accepts or rejects rule drafts at authoring time.

    Errors are returned, not raised, so callers can render the failing field.
    Cross-rule consistency (duplicate names and the like) is the store's job.
    """

    def check(self, draft: PricingRuleDraft) -> RuleValidationError | None:
        for check in CHECKS:
            error: RuleValidationError | None = check(draft)
            if error is not None:
                return error
        return None

    def validate(
        self,
        draft: PricingRuleDraft,
        *,
        sequence: int,
        rule_id: str | None = None,
    ) -> PricingRule | RuleValidationError:
        error: RuleValidationError | None = self.check(draft)
        if error is not None:
            logger.debug("Rule rejected", name=draft.name, field=error.field, code=error.code)
            return error
        return PricingRule.from_draft(draft, rule_id=rule_id or new_id(), sequence=sequence)


def validate(
    draft: PricingRuleDraft,
    *,
    sequence: int,
    rule_id: str | None = None,
) -> PricingRule | RuleValidationError:
    return RuleValidator().validate(draft, sequence=sequence, rule_id=rule_id)
