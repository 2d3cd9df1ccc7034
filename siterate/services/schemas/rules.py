"""Pricing rule data transfer objects and their dict codec."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation

from siterate.enums import AdjustmentType, RuleKind, StackMode
from siterate.services._helpers import parse_date, to_decimal
from siterate.services._types import PricingRuleDict
from siterate.services.errors import RuleDecodeError


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive date window. Either end may be open."""

    start: date | None = None
    end: date | None = None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        return self.end is None or day <= self.end


@dataclass(frozen=True, slots=True, kw_only=True)
class PricingRuleDraft:
    """An unvalidated rule definition, as submitted by a rule author."""

    scope_id: str
    name: str
    kind: RuleKind
    priority: int
    stack_mode: StackMode
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    site_class_id: str | None = None
    dow_mask: frozenset[int] | None = None
    date_range: DateRange | None = None
    min_rate_cap: int | None = None
    max_rate_cap: int | None = None
    min_nights: int | None = None
    active: bool = True

    def __post_init__(self) -> None:
        # Frozen: normalise through object.__setattr__.
        object.__setattr__(self, "kind", RuleKind(self.kind))
        object.__setattr__(self, "stack_mode", StackMode(self.stack_mode))
        object.__setattr__(self, "adjustment_type", AdjustmentType(self.adjustment_type))
        object.__setattr__(self, "adjustment_value", to_decimal(self.adjustment_value))
        if self.dow_mask is not None and not isinstance(self.dow_mask, frozenset):
            object.__setattr__(self, "dow_mask", frozenset(self.dow_mask))
        if not isinstance(self.active, bool):
            raise TypeError(f"active must be a bool, got {type(self.active).__name__}")
        if not isinstance(self.priority, int) or isinstance(self.priority, bool):
            raise TypeError(f"priority must be an int, got {type(self.priority).__name__}")

    @property
    def start_date(self) -> date | None:
        return self.date_range.start if self.date_range else None

    @property
    def end_date(self) -> date | None:
        return self.date_range.end if self.date_range else None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "PricingRuleDraft":
        return cls(**_decode_fields(data))


@dataclass(frozen=True, slots=True, kw_only=True)
class PricingRule(PricingRuleDraft):
    """A validated rule. ``sequence`` is the store-assigned creation order."""

    id: str
    sequence: int = field(default=0)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "PricingRule":
        rule_id: object = data.get("id")
        if not isinstance(rule_id, str) or not rule_id:
            raise RuleDecodeError("Rule is missing 'id'")
        sequence: object = data.get("sequence", 0)
        if not isinstance(sequence, int) or isinstance(sequence, bool):
            raise RuleDecodeError(f"Rule {rule_id}: 'sequence' must be an integer")
        return cls(id=rule_id, sequence=sequence, **_decode_fields(data))

    @classmethod
    def from_draft(cls, draft: PricingRuleDraft, *, rule_id: str, sequence: int) -> "PricingRule":
        return cls(
            id=rule_id,
            sequence=sequence,
            scope_id=draft.scope_id,
            name=draft.name,
            kind=draft.kind,
            priority=draft.priority,
            stack_mode=draft.stack_mode,
            adjustment_type=draft.adjustment_type,
            adjustment_value=draft.adjustment_value,
            site_class_id=draft.site_class_id,
            dow_mask=draft.dow_mask,
            date_range=draft.date_range,
            min_rate_cap=draft.min_rate_cap,
            max_rate_cap=draft.max_rate_cap,
            min_nights=draft.min_nights,
            active=draft.active,
        )

    def to_dict(self) -> PricingRuleDict:
        start: date | None = self.start_date
        end: date | None = self.end_date
        return {
            "id": self.id,
            "scopeId": self.scope_id,
            "name": self.name,
            "kind": self.kind.value,
            "priority": self.priority,
            "stackMode": self.stack_mode.value,
            "adjustmentType": self.adjustment_type.value,
            "adjustmentValue": str(self.adjustment_value),
            "siteClassId": self.site_class_id,
            "dowMask": sorted(self.dow_mask) if self.dow_mask is not None else None,
            "startDate": start.isoformat() if start else None,
            "endDate": end.isoformat() if end else None,
            "minRateCap": self.min_rate_cap,
            "maxRateCap": self.max_rate_cap,
            "minNights": self.min_nights,
            "active": self.active,
            "sequence": self.sequence,
        }


def _require(data: Mapping[str, object], key: str) -> object:
    if key not in data or data[key] is None:
        raise RuleDecodeError(f"Rule is missing '{key}'")
    return data[key]


def _optional_int(data: Mapping[str, object], key: str) -> int | None:
    raw: object = data.get(key)
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise RuleDecodeError(f"'{key}' must be a whole number, got {raw!r}")
    try:
        value: Decimal = to_decimal(raw)
    except InvalidOperation as e:
        raise RuleDecodeError(f"'{key}' must be a whole number, got {raw!r}") from e
    if not value.is_finite() or value != value.to_integral_value():
        raise RuleDecodeError(f"'{key}' must be a whole number, got {raw!r}")
    return int(value)


def _dow_mask(raw: object) -> frozenset[int] | None:
    if raw is None:
        return None
    if not isinstance(raw, Iterable) or isinstance(raw, (str, bytes)):
        raise RuleDecodeError(f"'dowMask' must be a list of weekdays, got {raw!r}")
    days: set[int] = set()
    for day in raw:
        if isinstance(day, str) and day.strip().lstrip("-").isdecimal():
            day = int(day)
        if isinstance(day, bool) or not isinstance(day, int):
            raise RuleDecodeError(f"'dowMask' must be a list of weekdays, got {raw!r}")
        days.add(day)
    return frozenset(days)


def _decode_fields(data: Mapping[str, object]) -> dict[str, object]:
    """Map camelCase API keys onto draft keyword arguments."""
    kind_raw: object = data.get("kind", data.get("type"))
    if kind_raw is None:
        raise RuleDecodeError("Rule is missing 'kind'")
    try:
        kind: RuleKind = RuleKind(kind_raw)
        stack_mode: StackMode = StackMode(_require(data, "stackMode"))
        adjustment_type: AdjustmentType = AdjustmentType(_require(data, "adjustmentType"))
    except ValueError as e:
        raise RuleDecodeError(str(e)) from e

    try:
        adjustment_value: Decimal = to_decimal(_require(data, "adjustmentValue"))
    except (InvalidOperation, TypeError) as e:
        raise RuleDecodeError(
            f"'adjustmentValue' is not a number: {data.get('adjustmentValue')!r}"
        ) from e

    try:
        start: date | None = parse_date(data.get("startDate"))
        end: date | None = parse_date(data.get("endDate"))
    except (TypeError, ValueError) as e:
        raise RuleDecodeError(f"Invalid rule date: {e}") from e

    priority: int | None = _optional_int(data, "priority")
    if priority is None:
        raise RuleDecodeError("Rule is missing 'priority'")

    active: object = data.get("active", True)
    if not isinstance(active, bool):
        raise RuleDecodeError(f"'active' must be true or false, got {active!r}")

    site_class: object = data.get("siteClassId")
    return {
        "scope_id": str(_require(data, "scopeId")),
        "name": str(data.get("name") or ""),
        "kind": kind,
        "priority": priority,
        "stack_mode": stack_mode,
        "adjustment_type": adjustment_type,
        "adjustment_value": adjustment_value,
        "site_class_id": str(site_class) if site_class not in (None, "") else None,
        "dow_mask": _dow_mask(data.get("dowMask")),
        "date_range": DateRange(start, end) if start or end else None,
        "min_rate_cap": _optional_int(data, "minRateCap"),
        "max_rate_cap": _optional_int(data, "maxRateCap"),
        "min_nights": _optional_int(data, "minNights"),
        "active": active,
    }
