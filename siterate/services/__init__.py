"""Service layer: validation, matching, resolution and stay pricing."""

from siterate.services.engine import PricingEngine, stay_nights
from siterate.services.errors import (
    CapConflictError,
    PricingEngineError,
    RuleDecodeError,
    RuleValidationError,
    StayTooLongError,
)
from siterate.services.matcher import RuleMatcher
from siterate.services.resolver import RateResolver
from siterate.services.rule_set import load_rule_set
from siterate.services.schemas import (
    AppliedRule,
    DateRange,
    NightlyRate,
    PricingRule,
    PricingRuleDraft,
    Resolution,
    StayQuote,
)
from siterate.services.validator import RuleValidator

__all__ = [
    "AppliedRule",
    "CapConflictError",
    "DateRange",
    "NightlyRate",
    "PricingEngine",
    "PricingEngineError",
    "PricingRule",
    "PricingRuleDraft",
    "RateResolver",
    "Resolution",
    "RuleDecodeError",
    "RuleMatcher",
    "RuleValidationError",
    "RuleValidator",
    "StayQuote",
    "StayTooLongError",
    "load_rule_set",
    "stay_nights",
]
