"""Shared fixtures — engine components and a rule-file writer."""

import json
from collections.abc import Callable
from decimal import Decimal
from pathlib import Path

import pytest

from siterate.enums import AdjustmentType, RuleKind, StackMode
from siterate.services import (
    PricingEngine,
    PricingRule,
    RateResolver,
    RuleMatcher,
    RuleValidator,
)


def make_rule(
    rule_id: str,
    *,
    priority: int = 10,
    stack_mode: StackMode = StackMode.ADDITIVE,
    adjustment_type: AdjustmentType = AdjustmentType.PERCENT,
    adjustment_value: str | int = "0.10",
    sequence: int | None = None,
    **kwargs: object,
) -> PricingRule:
    return PricingRule(
        id=rule_id,
        sequence=priority if sequence is None else sequence,
        scope_id=str(kwargs.pop("scope_id", "cg-1")),
        name=str(kwargs.pop("name", rule_id)),
        kind=kwargs.pop("kind", RuleKind.SEASON),
        priority=priority,
        stack_mode=stack_mode,
        adjustment_type=adjustment_type,
        adjustment_value=Decimal(str(adjustment_value)),
        **kwargs,
    )


@pytest.fixture()
def rule_factory() -> Callable[..., PricingRule]:
    return make_rule


@pytest.fixture()
def validator() -> RuleValidator:
    return RuleValidator()


@pytest.fixture()
def matcher() -> RuleMatcher:
    return RuleMatcher()


@pytest.fixture()
def resolver() -> RateResolver:
    return RateResolver()


@pytest.fixture()
def engine() -> PricingEngine:
    return PricingEngine()


@pytest.fixture()
def write_rules(tmp_path: Path) -> Callable[[object], Path]:
    def _write(payload: object) -> Path:
        path: Path = tmp_path / "rules.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
