"""Tests for siterate.services.engine."""

from datetime import date

import pytest
from conftest import make_rule

from siterate.config import PricingSettings
from siterate.enums import AdjustmentType, RoundingMode, RuleKind, StackMode
from siterate.services import (
    CapConflictError,
    DateRange,
    PricingEngine,
    PricingRule,
    Resolution,
    StayQuote,
    StayTooLongError,
    stay_nights,
)

FRIDAY = date(2025, 1, 17)


class TestStayNights:
    def test_counts_nights(self) -> None:
        assert stay_nights(date(2025, 1, 1), date(2025, 1, 4)) == 3
        assert stay_nights(date(2025, 1, 1), date(2025, 1, 8)) == 7

    def test_across_years(self) -> None:
        assert stay_nights(date(2024, 12, 30), date(2025, 1, 2)) == 3

    def test_same_day_is_one_night(self) -> None:
        assert stay_nights(date(2025, 1, 1), date(2025, 1, 1)) == 1

    def test_inverted_range_is_one_night(self) -> None:
        assert stay_nights(date(2025, 1, 5), date(2025, 1, 1)) == 1


class TestPriceNight:
    def test_matches_then_resolves(self, engine: PricingEngine) -> None:
        rules: list[PricingRule] = [
            make_rule("weekend", kind=RuleKind.WEEKEND, dow_mask=frozenset({5, 6})),
            make_rule("premium", site_class_id="premium", adjustment_value="0.50"),
        ]
        result = engine.price_night(5000, FRIDAY, "standard", rules)
        assert isinstance(result, Resolution)
        assert result.final_rate_cents == 5500
        assert [a.rule_id for a in result.applied] == ["weekend"]

    def test_conflict_carries_night(self, engine: PricingEngine) -> None:
        rules: list[PricingRule] = [
            make_rule("floor", priority=1, min_rate_cap=20000),
            make_rule("ceiling", priority=2, max_rate_cap=15000),
        ]
        result = engine.price_night(10000, FRIDAY, None, rules)
        assert isinstance(result, CapConflictError)
        assert result.night == FRIDAY
        assert "2025-01-17" in str(result)


class TestQuoteStay:
    def test_no_rules(self, engine: PricingEngine) -> None:
        quote = engine.quote_stay(5000, date(2025, 1, 1), date(2025, 1, 4), "standard", [])
        assert isinstance(quote, StayQuote)
        assert quote.nights == 3
        assert quote.base_subtotal_cents == 15000
        assert quote.adjustments_cents == 0
        assert quote.total_cents == 15000
        assert quote.applied_rule_ids == ()

    def test_weekend_rule_only_on_weekend_nights(self, engine: PricingEngine) -> None:
        weekend: PricingRule = make_rule(
            "weekend",
            kind=RuleKind.WEEKEND,
            dow_mask=frozenset({5, 6}),
            adjustment_type=AdjustmentType.FLAT,
            adjustment_value=1000,
        )
        # Thu, Fri, Sat, Sun nights
        quote = engine.quote_stay(5000, date(2025, 1, 16), date(2025, 1, 20), None, [weekend])
        assert isinstance(quote, StayQuote)
        assert [n.resolution.final_rate_cents for n in quote.nightly] == [5000, 6000, 6000, 5000]
        assert quote.total_cents == 22000
        assert quote.adjustments_cents == 2000
        assert quote.applied_rule_ids == ("weekend",)

    def test_override_drops_replaced_rules(self, engine: PricingEngine) -> None:
        rules: list[PricingRule] = [
            make_rule("additive", priority=1, adjustment_value="0.50"),
            make_rule(
                "override", priority=2, stack_mode=StackMode.OVERRIDE, adjustment_value="-0.10"
            ),
        ]
        quote = engine.quote_stay(10000, date(2025, 1, 1), date(2025, 1, 3), None, rules)
        assert isinstance(quote, StayQuote)
        assert quote.total_cents == 18000
        assert quote.applied_rule_ids == ("override",)

    def test_only_max_winner_listed(self, engine: PricingEngine) -> None:
        rules: list[PricingRule] = [
            make_rule("five", priority=1, stack_mode=StackMode.MAX, adjustment_value="0.05"),
            make_rule("twenty", priority=2, stack_mode=StackMode.MAX, adjustment_value="0.20"),
        ]
        quote = engine.quote_stay(10000, date(2025, 1, 1), date(2025, 1, 3), None, rules)
        assert isinstance(quote, StayQuote)
        assert quote.total_cents == 24000
        assert quote.applied_rule_ids == ("twenty",)

    def test_min_nights_uses_stay_length(self, engine: PricingEngine) -> None:
        weekly: PricingRule = make_rule("weekly", adjustment_value="-0.10", min_nights=7)
        short = engine.quote_stay(10000, date(2025, 3, 1), date(2025, 3, 4), None, [weekly])
        long = engine.quote_stay(10000, date(2025, 3, 1), date(2025, 3, 8), None, [weekly])
        assert isinstance(short, StayQuote) and isinstance(long, StayQuote)
        assert short.total_cents == 30000
        assert long.total_cents == 63000

    def test_season_boundary_inside_stay(self, engine: PricingEngine) -> None:
        season: PricingRule = make_rule(
            "summer",
            stack_mode=StackMode.OVERRIDE,
            adjustment_value="0.25",
            date_range=DateRange(date(2025, 6, 1), date(2025, 8, 31)),
        )
        quote = engine.quote_stay(8000, date(2025, 5, 30), date(2025, 6, 2), None, [season])
        assert isinstance(quote, StayQuote)
        assert [n.resolution.final_rate_cents for n in quote.nightly] == [8000, 8000, 10000]

    def test_conflict_aborts_quote(self, engine: PricingEngine) -> None:
        rules: list[PricingRule] = [
            make_rule("floor", priority=1, min_rate_cap=20000, dow_mask=frozenset({6})),
            make_rule("ceiling", priority=2, max_rate_cap=15000),
        ]
        result = engine.quote_stay(10000, date(2025, 1, 16), date(2025, 1, 20), None, rules)
        assert isinstance(result, CapConflictError)
        assert result.night == date(2025, 1, 18)

    def test_too_long(self) -> None:
        engine: PricingEngine = PricingEngine(max_stay_nights=30)
        with pytest.raises(StayTooLongError):
            engine.quote_stay(5000, date(2025, 1, 1), date(2025, 3, 1), None, [])

    def test_to_dict(self, engine: PricingEngine) -> None:
        quote = engine.quote_stay(
            5000, date(2025, 1, 1), date(2025, 1, 2), None, [make_rule("r1")]
        )
        assert isinstance(quote, StayQuote)
        data = quote.to_dict()
        assert data["nights"] == 1
        assert data["totalCents"] == 5500
        assert data["nightly"][0]["night"] == "2025-01-01"
        assert data["nightly"][0]["resolution"]["applied"][0]["ruleId"] == "r1"


class TestFromSettings:
    def test_uses_configured_rounding_and_limit(self) -> None:
        settings: PricingSettings = PricingSettings(
            rounding=RoundingMode.HALF_EVEN, max_stay_nights=14
        )
        engine: PricingEngine = PricingEngine.from_settings(settings)
        assert engine.resolver.rounding is RoundingMode.HALF_EVEN
        assert engine.max_stay_nights == 14
