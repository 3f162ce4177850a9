"""Reduce completion timestamps to calendar days.

Every comparison in the analytics layer happens on plain ``date`` values.
Time-of-day is discarded without any time-zone conversion: an aware
timestamp keeps its own wall-clock date, so both sides of a comparison must
come through the same function.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Iterator, Union

from ..errors import MalformedDateError
from ..logging_config import get_logger

logger = get_logger(__name__)

DateLike = Union[date, datetime, str]


def normalize(value: DateLike) -> date:
    """Return the calendar day for ``value``.

    Accepts ``date``, ``datetime`` and ISO-8601 strings (date-only or full
    timestamps, a trailing ``Z`` included). Raises ``MalformedDateError`` for
    anything that cannot be read as a day.
    """

    # datetime is a date subclass, so it must be checked first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return _parse_iso(value)
    raise MalformedDateError(value)


def _parse_iso(raw: str) -> date:
    text = raw.strip()
    if not text:
        raise MalformedDateError(raw)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise MalformedDateError(raw) from exc


def normalize_days(values: Iterable[Any]) -> set[date]:
    """Normalize many values into a set of distinct days.

    Values that cannot be normalized are skipped and logged; the caller
    decides whether that deserves a user-facing warning.
    """

    days: set[date] = set()
    for value in values:
        try:
            days.add(normalize(value))
        except MalformedDateError:
            logger.warning("Skipping malformed completion date", extra={"value": repr(value)})
    return days


def completion_days(completions: Iterable[Any]) -> set[date]:
    """Distinct days from rows exposing a ``completed_date`` attribute."""

    return normalize_days(getattr(row, "completed_date", None) for row in completions)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of ``year``-``month``."""

    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def week_bounds(day: date, week_start: int = calendar.SUNDAY) -> tuple[date, date]:
    """Return the first and last day of the week containing ``day``.

    ``week_start`` uses the ``calendar`` constants (MONDAY=0 .. SUNDAY=6).
    """

    offset = (day.weekday() - week_start) % 7
    start = day - timedelta(days=offset)
    return start, start + timedelta(days=6)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` through ``end`` inclusive."""

    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def days_in_period(start: date, end: date) -> int:
    """Number of days in the inclusive window, 0 when it is empty."""

    return max((end - start).days + 1, 0)


__all__ = [
    "DateLike",
    "completion_days",
    "days_in_period",
    "iter_days",
    "month_bounds",
    "normalize",
    "normalize_days",
    "week_bounds",
]
