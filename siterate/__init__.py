"""Dynamic nightly pricing rule engine for campground site classes."""

from siterate.enums import AdjustmentType, CapBound, RoundingMode, RuleKind, StackMode
from siterate.services import (
    CapConflictError,
    PricingEngine,
    PricingRule,
    PricingRuleDraft,
    RateResolver,
    RuleMatcher,
    RuleValidationError,
    RuleValidator,
)

__version__ = "0.1.0"

__all__ = [
    "AdjustmentType",
    "CapBound",
    "CapConflictError",
    "PricingEngine",
    "PricingRule",
    "PricingRuleDraft",
    "RateResolver",
    "RoundingMode",
    "RuleKind",
    "RuleMatcher",
    "RuleValidationError",
    "RuleValidator",
    "StackMode",
]
