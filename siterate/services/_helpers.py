"""Shared utilities for the service layer."""

from datetime import date, datetime
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from uuid import uuid4

from siterate.enums import RoundingMode

_ROUNDING: dict[RoundingMode, str] = {
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
}


def new_id() -> str:
    return str(uuid4())


def to_decimal(value: object) -> Decimal:
    """Convert a number to Decimal without float noise (0.1 -> Decimal('0.1'))."""
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric adjustment")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)):
        return Decimal(str(value).strip())
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def round_cents(amount: Decimal, mode: RoundingMode = RoundingMode.HALF_UP) -> int:
    return int(amount.quantize(Decimal(1), rounding=_ROUNDING[mode]))


def weekday_sun0(day: date) -> int:
    """Weekday number with Sunday=0 .. Saturday=6."""
    return day.isoweekday() % 7


def parse_date(raw: object) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw)
        except ValueError:
            # Full ISO timestamps from API payloads; only the date part matters.
            return datetime.fromisoformat(raw).date()
    raise TypeError(f"Expected ISO date string, got {type(raw).__name__}")
