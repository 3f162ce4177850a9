"""Service module exports."""

from . import analytics, calendar, dates, goals, habits, statistics

__all__ = [
    "analytics",
    "calendar",
    "dates",
    "goals",
    "habits",
    "statistics",
]
