"""Enumeration types for the siterate pricing engine."""

from enum import Enum


class RuleKind(str, Enum):
    """What a pricing rule represents (UI and validation hint only)."""

    SEASON = "season"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    EVENT = "event"
    DEMAND = "demand"


class StackMode(str, Enum):
    """How a rule's adjustment combines with the running rate."""

    ADDITIVE = "additive"
    MAX = "max"
    OVERRIDE = "override"


class AdjustmentType(str, Enum):
    """Unit of a rule's adjustment value."""

    PERCENT = "percent"  # Fraction of the reference rate, 0.15 = +15%
    FLAT = "flat"  # Signed cents


class CapBound(str, Enum):
    """Which cap a resolved rate was clamped to."""

    MIN = "min"
    MAX = "max"


class RoundingMode(str, Enum):
    """Rounding applied when a delta produces fractional cents."""

    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
