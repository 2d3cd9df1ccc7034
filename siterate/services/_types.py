"""Typed dicts for serialized engine values.

Keeps codec and CLI output explicit about their shape instead of returning bare dicts.
"""

import sys

if sys.version_info >= (3, 12):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

# -- Rules -----------------------------------------------------------------


class PricingRuleDict(TypedDict, total=False):
    id: str
    scopeId: str
    name: str
    kind: str
    priority: int
    stackMode: str
    adjustmentType: str
    adjustmentValue: str
    siteClassId: str | None
    dowMask: list[int] | None
    startDate: str | None
    endDate: str | None
    minRateCap: int | None
    maxRateCap: int | None
    minNights: int | None
    active: bool
    sequence: int


class ValidationErrorDict(TypedDict):
    code: str
    field: str
    message: str


# -- Resolution ------------------------------------------------------------


class AppliedRuleDict(TypedDict):
    ruleId: str
    name: str
    stackMode: str
    deltaCents: int
    rateAfterCents: int
    effective: bool


class ResolutionDict(TypedDict):
    baseRateCents: int
    finalRateCents: int
    minCap: int | None
    maxCap: int | None
    cappedAt: str | None
    applied: list[AppliedRuleDict]


class NightlyRateDict(TypedDict):
    night: str
    resolution: ResolutionDict


class StayQuoteDict(TypedDict):
    arrival: str
    departure: str
    nights: int
    baseSubtotalCents: int
    adjustmentsCents: int
    totalCents: int
    appliedRuleIds: list[str]
    nightly: list[NightlyRateDict]
