"""Main CLI entry point."""

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from siterate.config import configure_logging, get_settings
from siterate.services import (
    CapConflictError,
    PricingEngine,
    PricingRule,
    Resolution,
    RuleDecodeError,
    RuleValidationError,
    StayQuote,
    StayTooLongError,
    load_rule_set,
)

app = typer.Typer(
    name="siterate",
    help="Campground dynamic pricing rule engine CLI",
    add_completion=False
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log matching and resolution steps"),
):
    """Validate pricing rules and preview nightly rates."""
    settings = get_settings()
    level = "DEBUG" if verbose or settings.debug else settings.log_level
    configure_logging(level, json_output=settings.log_json)


def parse_iso_date(value: str, option: str) -> date:
    """Parse a date string like '2025-07-04'."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid date '{value}' for {option}. Expected format: YYYY-MM-DD"
        )


def money(cents: int) -> str:
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents) // 100:,}.{abs(cents) % 100:02d}"


def read_rules_file(path: Path) -> list[dict[str, object]]:
    """Read a JSON rule file: a list of rules or {"rules": [...]}."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise typer.BadParameter(f"Cannot read rules from {path}: {e}")
    if isinstance(data, dict):
        data = data.get("rules")
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise typer.BadParameter(f"{path} must contain a list of rule objects")
    return data


def load_rules(path: Path) -> tuple[list[PricingRule], list[tuple[int, RuleValidationError]]]:
    try:
        return load_rule_set(read_rules_file(path))
    except RuleDecodeError as e:
        console.print(f"[red]Malformed rule:[/red] {e}")
        raise typer.Exit(code=2)


def print_errors(errors: list[tuple[int, RuleValidationError]]) -> None:
    table = Table(title="Invalid Rules")
    table.add_column("Index", style="cyan")
    table.add_column("Field", style="yellow")
    table.add_column("Error", style="red")
    for index, err in errors:
        table.add_row(str(index), err.field, err.message)
    console.print(table)


def print_conflict(conflict: CapConflictError) -> None:
    console.print(f"[red]Cap conflict:[/red] {conflict}")


@app.command()
def validate(
    rules_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON rule file"),
):
    """Validate every rule in a rule file."""
    rules, errors = load_rules(rules_file)
    if errors:
        print_errors(errors)
        raise typer.Exit(code=1)
    console.print(f"[green]{len(rules)} rule(s) valid[/green]")


@app.command()
def price(
    rules_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON rule file"),
    base: int = typer.Option(..., "--base", "-b", help="Base nightly rate in cents"),
    date_str: str = typer.Option(..., "--date", "-d", help="Night to price (YYYY-MM-DD)"),
    site_class: Optional[str] = typer.Option(None, "--site-class", "-s", help="Site class id"),
    nights: int = typer.Option(1, "--nights", "-n", min=1, help="Length of the stay"),
    as_json: bool = typer.Option(False, "--json", help="Print the resolution as JSON"),
):
    """Resolve the nightly rate for one date."""
    target = parse_iso_date(date_str, "--date")
    rules, errors = load_rules(rules_file)
    if errors:
        print_errors(errors)
        raise typer.Exit(code=1)

    engine = PricingEngine.from_settings()
    result = engine.price_night(base, target, site_class, rules, stay_nights=nights)
    if isinstance(result, CapConflictError):
        print_conflict(result)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict()))
        return
    print_resolution(target, result)


def print_resolution(night: date, result: Resolution) -> None:
    table = Table(title=f"Rate for {night.isoformat()}")
    table.add_column("Rule", style="cyan")
    table.add_column("Mode")
    table.add_column("Delta", justify="right")
    table.add_column("Rate After", justify="right", style="green")

    for step in result.applied:
        style = "" if step.effective else "dim"
        table.add_row(
            step.name, step.stack_mode.value, money(step.delta_cents), money(step.rate_after_cents),
            style=style,
        )
    console.print(table)
    console.print(f"Base:  {money(result.base_rate_cents)}")
    if result.capped_at is not None:
        console.print(f"[yellow]Capped at {result.capped_at.value}[/yellow]")
    console.print(f"Final: [bold]{money(result.final_rate_cents)}[/bold]")
    if result.is_negative:
        console.print("[red]Warning: resolved rate is negative[/red]")


@app.command()
def quote(
    rules_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON rule file"),
    base: int = typer.Option(..., "--base", "-b", help="Base nightly rate in cents"),
    arrival_str: str = typer.Option(..., "--arrival", "-a", help="Arrival date (YYYY-MM-DD)"),
    departure_str: str = typer.Option(..., "--departure", "-D", help="Departure date (YYYY-MM-DD)"),
    site_class: Optional[str] = typer.Option(None, "--site-class", "-s", help="Site class id"),
    as_json: bool = typer.Option(False, "--json", help="Print the quote as JSON"),
):
    """Price every night of a stay."""
    arrival = parse_iso_date(arrival_str, "--arrival")
    departure = parse_iso_date(departure_str, "--departure")
    rules, errors = load_rules(rules_file)
    if errors:
        print_errors(errors)
        raise typer.Exit(code=1)

    engine = PricingEngine.from_settings()
    try:
        result = engine.quote_stay(base, arrival, departure, site_class, rules)
    except StayTooLongError as e:
        raise typer.BadParameter(str(e))
    if isinstance(result, CapConflictError):
        print_conflict(result)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict()))
        return
    print_quote(result)


def print_quote(result: StayQuote) -> None:
    table = Table(title=f"Stay {result.arrival} to {result.departure} ({result.nights} nights)")
    table.add_column("Night", style="cyan")
    table.add_column("Rate", justify="right", style="green")
    table.add_column("Capped")
    table.add_column("Rules")

    for nightly in result.nightly:
        res = nightly.resolution
        table.add_row(
            nightly.night.isoformat(),
            money(res.final_rate_cents),
            res.capped_at.value if res.capped_at else "",
            ", ".join(a.name for a in res.applied if a.effective),
        )
    console.print(table)
    console.print(f"Base subtotal: {money(result.base_subtotal_cents)}")
    console.print(f"Adjustments:   {money(result.adjustments_cents)}")
    console.print(f"Total:         [bold]{money(result.total_cents)}[/bold]")


if __name__ == "__main__":
    app()
