"""Tests for the siterate command-line interface."""

import json
from collections.abc import Callable
from pathlib import Path

from typer.testing import CliRunner

from siterate.cli.main import app, money

runner = CliRunner()


def _rule(rule_id: str, **overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "id": rule_id,
        "scopeId": "cg-1",
        "name": rule_id.title(),
        "kind": "season",
        "priority": 10,
        "stackMode": "additive",
        "adjustmentType": "percent",
        "adjustmentValue": "0.10",
    }
    data.update(overrides)
    return data


def test_money_formatting() -> None:
    assert money(11550) == "$115.50"
    assert money(5) == "$0.05"
    assert money(-1000) == "-$10.00"
    assert money(123456789) == "$1,234,567.89"


class TestValidate:
    def test_valid_file(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules({"rules": [_rule("summer"), _rule("fall")]})
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 0
        assert "2 rule(s) valid" in result.output

    def test_invalid_rule_exit_code(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules([_rule("summer", priority=1000)])
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "priority" in result.output

    def test_malformed_rule(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules([_rule("summer", stackMode="stacked")])
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 2

    def test_not_a_rule_list(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules({"rules": "nope"})
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code != 0


class TestPrice:
    def test_json_output(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules(
            [
                _rule("ten", priority=1),
                _rule("five", priority=2, adjustmentValue="0.05"),
            ]
        )
        result = runner.invoke(
            app, ["price", str(path), "--base", "10000", "--date", "2025-07-04", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["finalRateCents"] == 11550
        assert [a["ruleId"] for a in data["applied"]] == ["ten", "five"]

    def test_table_output(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules([_rule("surge", adjustmentValue="0.80", maxRateCap=15000)])
        result = runner.invoke(app, ["price", str(path), "-b", "10000", "-d", "2025-07-04"])
        assert result.exit_code == 0
        assert "$150.00" in result.output
        assert "Capped at max" in result.output

    def test_site_class_scope(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules([_rule("premium", siteClassId="premium")])
        result = runner.invoke(
            app,
            ["price", str(path), "-b", "5000", "-d", "2025-07-04", "-s", "standard", "--json"],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["finalRateCents"] == 5000

    def test_cap_conflict(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules(
            [
                _rule("floor", priority=1, minRateCap=20000),
                _rule("ceiling", priority=2, maxRateCap=15000),
            ]
        )
        result = runner.invoke(app, ["price", str(path), "-b", "10000", "-d", "2025-07-04"])
        assert result.exit_code == 1
        assert "Cap conflict" in result.output

    def test_bad_date(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules([_rule("summer")])
        result = runner.invoke(app, ["price", str(path), "-b", "10000", "-d", "07/04/2025"])
        assert result.exit_code == 2


class TestQuote:
    def test_json_output(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules(
            [_rule("weekend", kind="weekend", dowMask=[5, 6], adjustmentType="flat", adjustmentValue=1000)]
        )
        result = runner.invoke(
            app,
            [
                "quote",
                str(path),
                "--base",
                "5000",
                "--arrival",
                "2025-01-16",
                "--departure",
                "2025-01-20",
                "--json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["nights"] == 4
        assert data["totalCents"] == 22000
        assert data["appliedRuleIds"] == ["weekend"]

    def test_table_output(self, write_rules: Callable[[object], Path]) -> None:
        path: Path = write_rules([_rule("summer")])
        result = runner.invoke(
            app, ["quote", str(path), "-b", "5000", "-a", "2025-01-01", "-D", "2025-01-03"]
        )
        assert result.exit_code == 0
        assert "$110.00" in result.output
