from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

WEEKDAY_LABELS = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")

DateLike = Union[date, datetime]


def format_date_key(day: DateLike) -> str:
    """Return the ``YYYY-MM-DD`` key used to index entries."""

    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def parse_date_key(key: str) -> date:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError) as exc:  # noqa: TRY003
        raise ValueError(f"Invalid date key: {key!r}") from exc


def days_in_month(year: int, month: int) -> List[Optional[date]]:
    """Month grid for a Sunday-first calendar.

    Leading ``None`` cells pad the first week so that day one lands on its
    weekday column; every day of the month follows in order.
    """

    first = date(year, month, 1)
    offset = (first.weekday() + 1) % 7
    cells: List[Optional[date]] = [None] * offset
    _, length = calendar.monthrange(year, month)
    cells.extend(first + timedelta(days=index) for index in range(length))
    return cells


def is_same_day(left: DateLike, right: DateLike) -> bool:
    return format_date_key(left) == format_date_key(right)


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be within 1..12, got {month}")
    return calendar.month_name[month]


__all__ = [
    "WEEKDAY_LABELS",
    "days_in_month",
    "format_date_key",
    "is_same_day",
    "month_name",
    "parse_date_key",
]
