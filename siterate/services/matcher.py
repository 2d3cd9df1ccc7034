"""Selects the pricing rules that apply to a night, in evaluation order."""

from collections.abc import Iterable
from datetime import date

import structlog

from siterate.services._helpers import weekday_sun0
from siterate.services.schemas.rules import PricingRule

logger = structlog.get_logger(__name__)


def evaluation_order(rule: PricingRule) -> tuple[int, int]:
    """Lower priority first; equal priorities by creation sequence."""
    return (rule.priority, rule.sequence)


class RuleMatcher:
    """Filters a property's rule set down to the rules for one night."""

    def applies(
        self,
        rule: PricingRule,
        target_date: date,
        site_class_id: str | None = None,
        *,
        stay_nights: int = 1,
    ) -> bool:
        if not rule.active:
            return False
        if rule.site_class_id is not None and rule.site_class_id != site_class_id:
            return False
        if rule.date_range is not None and not rule.date_range.contains(target_date):
            return False
        if rule.dow_mask and weekday_sun0(target_date) not in rule.dow_mask:
            return False
        return rule.min_nights is None or stay_nights >= rule.min_nights

    def match(
        self,
        rules: Iterable[PricingRule],
        target_date: date,
        site_class_id: str | None = None,
        *,
        stay_nights: int = 1,
    ) -> list[PricingRule]:
        seen: set[str] = set()
        matched: list[PricingRule] = []
        for rule in rules:
            if rule.id in seen:
                continue
            seen.add(rule.id)
            if self.applies(rule, target_date, site_class_id, stay_nights=stay_nights):
                matched.append(rule)
        # sorted() is stable, so duplicate sequences keep input order.
        matched.sort(key=evaluation_order)
        logger.debug(
            "Rules matched",
            target_date=target_date.isoformat(),
            site_class_id=site_class_id,
            matched=[r.id for r in matched],
        )
        return matched


def match(
    rules: Iterable[PricingRule],
    target_date: date,
    site_class_id: str | None = None,
    *,
    stay_nights: int = 1,
) -> list[PricingRule]:
    return RuleMatcher().match(rules, target_date, site_class_id, stay_nights=stay_nights)
