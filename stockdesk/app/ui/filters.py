from __future__ import annotations

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Callable, Sequence

Predicate = Callable[[Any], bool]

ALL = "all"
END_OF_DAY = time(23, 59, 59, 999000)

PRODUCT_SEARCH_FIELDS = ("name", "sku", "category", "supplier")
TRANSACTION_SEARCH_FIELDS = ("product_name", "product_sku", "user_name", "type")
USER_SEARCH_FIELDS = ("name", "email")
ALERT_SEARCH_FIELDS = ("name", "sku", "category")


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value not in (None, "", ALL)}


def field_text(record: Any, field: str) -> str:
    value = record.get(field) if isinstance(record, dict) else getattr(record, field, None)
    if isinstance(value, Enum):
        value = value.value
    return "" if value is None else str(value)


def to_date(value: date | datetime | str | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")).date()


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def day_bounds(start: date | datetime | str | None, end: date | datetime | str | None) -> tuple[datetime | None, datetime | None]:
    """Inclusive UTC bounds: start of ``start`` day through 23:59:59.999 of ``end`` day."""
    start_day = to_date(start)
    end_day = to_date(end)
    lower = datetime.combine(start_day, time.min, tzinfo=timezone.utc) if start_day else None
    upper = datetime.combine(end_day, END_OF_DAY, tzinfo=timezone.utc) if end_day else None
    return lower, upper


def equals_filter(field: str, value: Any) -> Predicate | None:
    if value in (None, "", ALL):
        return None
    expected = value.value if isinstance(value, Enum) else str(value)
    return lambda record: field_text(record, field) == expected


def date_range_filter(
    start: date | datetime | str | None,
    end: date | datetime | str | None,
    get_moment: Callable[[Any], datetime | None],
) -> Predicate | None:
    lower, upper = day_bounds(start, end)
    if lower is None and upper is None:
        return None

    def predicate(record: Any) -> bool:
        moment = get_moment(record)
        if moment is None:
            return False
        moment = as_utc(moment)
        if lower is not None and moment < lower:
            return False
        if upper is not None and moment > upper:
            return False
        return True

    return predicate


def search_filter(term: str | None, fields: Sequence[str]) -> Predicate | None:
    needle = (term or "").strip().lower()
    if not needle:
        return None
    return lambda record: any(needle in field_text(record, field).lower() for field in fields)
