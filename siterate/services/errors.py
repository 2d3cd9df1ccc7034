"""Shared exception hierarchy for the pricing engine.

Validation and resolution errors are returned as values by the validator and
resolver rather than raised; they subclass Exception so callers may raise them.
"""

from datetime import date

from siterate.services._types import ValidationErrorDict


class PricingEngineError(Exception):
    """Base exception for pricing engine errors."""


# ── Validation ────────────────────────────────────────────────────────────────


class RuleValidationError(PricingEngineError):
    """A rule draft violates a structural invariant."""

    code: str = "invalid_rule"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field: str = field
        self.message: str = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleValidationError):
            return NotImplemented
        return (type(self), self.field, self.message) == (type(other), other.field, other.message)

    def __hash__(self) -> int:
        return hash((type(self), self.field, self.message))

    def to_dict(self) -> ValidationErrorDict:
        return {"code": self.code, "field": self.field, "message": self.message}


class InvalidName(RuleValidationError):
    code = "invalid_name"


class InvalidPriority(RuleValidationError):
    code = "invalid_priority"


class ZeroAdjustment(RuleValidationError):
    code = "zero_adjustment"


class InvalidCap(RuleValidationError):
    code = "invalid_cap"


class CapOrderViolation(RuleValidationError):
    code = "cap_order_violation"


class DateOrderViolation(RuleValidationError):
    code = "date_order_violation"


class InvalidDayOfWeek(RuleValidationError):
    code = "invalid_day_of_week"


class InvalidMinNights(RuleValidationError):
    code = "invalid_min_nights"


# ── Resolution ────────────────────────────────────────────────────────────────


class CapConflictError(PricingEngineError):
    """Matched rules produce a floor above the ceiling."""

    def __init__(
        self,
        min_cap: int,
        max_cap: int,
        min_cap_rule_id: str,
        max_cap_rule_id: str,
        night: date | None = None,
    ) -> None:
        self.min_cap: int = min_cap
        self.max_cap: int = max_cap
        self.min_cap_rule_id: str = min_cap_rule_id
        self.max_cap_rule_id: str = max_cap_rule_id
        self.night: date | None = night
        super().__init__(self._describe())

    def _describe(self) -> str:
        text: str = (
            f"min cap {self.min_cap} (rule {self.min_cap_rule_id}) exceeds "
            f"max cap {self.max_cap} (rule {self.max_cap_rule_id})"
        )
        if self.night is not None:
            text += f" on {self.night.isoformat()}"
        return text

    def for_night(self, night: date) -> "CapConflictError":
        return CapConflictError(
            self.min_cap, self.max_cap, self.min_cap_rule_id, self.max_cap_rule_id, night
        )


class StayTooLongError(PricingEngineError):
    """Stay quote exceeds the configured maximum number of nights."""


# ── Codec ─────────────────────────────────────────────────────────────────────


class RuleDecodeError(PricingEngineError):
    """A serialized rule could not be decoded."""
