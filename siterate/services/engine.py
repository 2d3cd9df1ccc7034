"""Nightly and per-stay pricing on top of the matcher and resolver."""

from collections.abc import Sequence
from datetime import date, timedelta

import structlog

from siterate.config.settings import PricingSettings, get_settings
from siterate.services.errors import CapConflictError, StayTooLongError
from siterate.services.matcher import RuleMatcher
from siterate.services.resolver import RateResolver
from siterate.services.schemas.results import NightlyRate, Resolution, StayQuote
from siterate.services.schemas.rules import PricingRule

logger = structlog.get_logger(__name__)


def stay_nights(arrival: date, departure: date) -> int:
    """Nights between arrival and departure; same-day or inverted stays count as one."""
    return max(1, (departure - arrival).days)


class PricingEngine:
    """Prices nights and stays for one property's rule snapshot.

    Holds no rule state: every call receives the full rule set from the caller.
    """

    def __init__(
        self,
        matcher: RuleMatcher | None = None,
        resolver: RateResolver | None = None,
        max_stay_nights: int = 365,
    ) -> None:
        self.matcher: RuleMatcher = matcher or RuleMatcher()
        self.resolver: RateResolver = resolver or RateResolver()
        self.max_stay_nights: int = max_stay_nights

    @classmethod
    def from_settings(cls, settings: PricingSettings | None = None) -> "PricingEngine":
        settings = settings or get_settings()
        return cls(
            resolver=RateResolver(rounding=settings.rounding),
            max_stay_nights=settings.max_stay_nights,
        )

    def price_night(
        self,
        base_rate_cents: int,
        target_date: date,
        site_class_id: str | None,
        rules: Sequence[PricingRule],
        *,
        stay_nights: int = 1,
    ) -> Resolution | CapConflictError:
        matched: list[PricingRule] = self.matcher.match(
            rules, target_date, site_class_id, stay_nights=stay_nights
        )
        result: Resolution | CapConflictError = self.resolver.resolve(base_rate_cents, matched)
        if isinstance(result, CapConflictError):
            return result.for_night(target_date)
        return result

    def quote_stay(
        self,
        base_rate_cents: int,
        arrival: date,
        departure: date,
        site_class_id: str | None,
        rules: Sequence[PricingRule],
    ) -> StayQuote | CapConflictError:
        nights: int = stay_nights(arrival, departure)
        if nights > self.max_stay_nights:
            raise StayTooLongError(
                f"Stay of {nights} nights exceeds the limit of {self.max_stay_nights}"
            )

        nightly: list[NightlyRate] = []
        applied_ids: dict[str, None] = {}
        for offset in range(nights):
            night: date = arrival + timedelta(days=offset)
            result: Resolution | CapConflictError = self.price_night(
                base_rate_cents, night, site_class_id, rules, stay_nights=nights
            )
            if isinstance(result, CapConflictError):
                logger.warning("Stay quote aborted", night=night.isoformat(), error=str(result))
                return result
            nightly.append(NightlyRate(night=night, resolution=result))
            for step in result.applied:
                if step.effective:
                    applied_ids.setdefault(step.rule_id)

        base_subtotal: int = base_rate_cents * nights
        total: int = sum(n.resolution.final_rate_cents for n in nightly)
        logger.info(
            "Stay quoted",
            arrival=arrival.isoformat(),
            nights=nights,
            site_class_id=site_class_id,
            total_cents=total,
        )
        return StayQuote(
            arrival=arrival,
            departure=departure,
            nights=nights,
            base_subtotal_cents=base_subtotal,
            adjustments_cents=total - base_subtotal,
            total_cents=total,
            nightly=tuple(nightly),
            applied_rule_ids=tuple(applied_ids),
        )
