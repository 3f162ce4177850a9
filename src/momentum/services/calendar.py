"""Month calendar projection for a single habit."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from .dates import iter_days, month_bounds, week_bounds

DAYS_PER_WEEK = 7


def percent(numerator: int, denominator: int) -> int:
    """Integer percentage rounded half-up; 0 when the denominator is 0."""

    if denominator <= 0:
        return 0
    ratio = Decimal(numerator) * 100 / Decimal(denominator)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class CalendarCell:
    day: date
    in_month: bool
    completed: bool
    is_today: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "in_month": self.in_month,
            "completed": self.completed,
            "is_today": self.is_today,
        }


@dataclass(frozen=True, slots=True)
class CalendarMonth:
    """Grid of whole weeks around a month plus the month's completion rate."""

    year: int
    month: int
    cells: list[CalendarCell] = field(default_factory=list)
    completed_days: int = 0
    days_in_month: int = 0

    @property
    def completion_rate(self) -> int:
        return percent(self.completed_days, self.days_in_month)

    def weeks(self) -> list[list[CalendarCell]]:
        """Cells chunked into rows of seven."""
        return [
            self.cells[offset : offset + DAYS_PER_WEEK]
            for offset in range(0, len(self.cells), DAYS_PER_WEEK)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "completion_rate": self.completion_rate,
            "completed_days": self.completed_days,
            "days_in_month": self.days_in_month,
            "cells": [cell.to_dict() for cell in self.cells],
        }


def grid_bounds(year: int, month: int, *, week_start: int = calendar.SUNDAY) -> tuple[date, date]:
    """First and last day shown on the grid for ``year``-``month``."""

    first, last = month_bounds(year, month)
    grid_start, _ = week_bounds(first, week_start)
    _, grid_end = week_bounds(last, week_start)
    return grid_start, grid_end


def project_calendar(
    year: int,
    month: int,
    days: Iterable[date],
    *,
    today: date,
    week_start: int = calendar.SUNDAY,
) -> CalendarMonth:
    """Lay out ``year``-``month`` as full weeks, flagging completed days.

    Only days inside the month count towards the completion rate; the
    padding days from adjacent months are shown but never counted.
    """

    completed = set(days)
    first, last = month_bounds(year, month)
    grid_start, grid_end = grid_bounds(year, month, week_start=week_start)

    cells = [
        CalendarCell(
            day=day,
            in_month=first <= day <= last,
            completed=day in completed,
            is_today=day == today,
        )
        for day in iter_days(grid_start, grid_end)
    ]
    completed_in_month = sum(1 for cell in cells if cell.in_month and cell.completed)

    return CalendarMonth(
        year=year,
        month=month,
        cells=cells,
        completed_days=completed_in_month,
        days_in_month=last.day,
    )


__all__ = ["CalendarCell", "CalendarMonth", "grid_bounds", "percent", "project_calendar"]
