"""Shared dataclasses for pricing services."""

from siterate.services.schemas.results import (
    AppliedRule,
    NightlyRate,
    Resolution,
    StayQuote,
)
from siterate.services.schemas.rules import DateRange, PricingRule, PricingRuleDraft

__all__ = [
    # Rule schemas
    "DateRange",
    "PricingRule",
    "PricingRuleDraft",
    # Result schemas
    "AppliedRule",
    "NightlyRate",
    "Resolution",
    "StayQuote",
]
