"""Aggregate statistics across all of a user's habits for a reporting period."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping, Sequence

from ..logging_config import get_logger
from ..models.habit import Habit
from .calendar import percent
from .dates import days_in_period, week_bounds
from .habits import StreakSummary

logger = get_logger(__name__)

TOP_HABITS_LIMIT = 5


@dataclass(frozen=True, slots=True)
class TopHabit:
    habit: Habit
    count: int
    current_streak: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "habit_id": self.habit.id,
            "name": self.habit.name,
            "color": self.habit.color,
            "count": self.count,
            "current_streak": self.current_streak,
        }


@dataclass(frozen=True, slots=True)
class UserStatistics:
    """Read model returned by ``compute_statistics``."""

    period_start: date
    period_end: date
    habit_count: int = 0
    completion_rate: int = 0
    best_streak: int = 0
    total_completions: int = 0
    weekly_completions: int = 0
    completed_today: int = 0
    top_habits: list[TopHabit] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "habit_count": self.habit_count,
            "completion_rate": self.completion_rate,
            "best_streak": self.best_streak,
            "total_completions": self.total_completions,
            "weekly_completions": self.weekly_completions,
            "completed_today": self.completed_today,
            "top_habits": [item.to_dict() for item in self.top_habits],
        }


def elapsed_days(period_start: date, period_end: date, *, today: date) -> int:
    """Days of the period that have already started, counting ``today``."""

    return days_in_period(period_start, min(today, period_end))


def rank_habits(
    habits: Sequence[Habit],
    counts: Mapping[int, int],
    streaks: Mapping[int, StreakSummary],
    *,
    limit: int = TOP_HABITS_LIMIT,
) -> list[TopHabit]:
    """Habits ordered by completion count, ties keeping their input order."""

    entries = [
        TopHabit(
            habit=habit,
            count=counts.get(habit.id, 0),
            current_streak=streaks.get(habit.id, StreakSummary()).current_streak,
        )
        for habit in habits
    ]
    # sorted() is stable, including with reverse=True
    entries = sorted(entries, key=lambda item: item.count, reverse=True)
    return entries[:limit]


def compute_statistics(
    habits: Sequence[Habit],
    days_by_habit: Mapping[int, Iterable[date]],
    streaks: Mapping[int, StreakSummary],
    *,
    period_start: date,
    period_end: date,
    today: date,
    top_n: int = TOP_HABITS_LIMIT,
    week_start: int = calendar.SUNDAY,
) -> UserStatistics:
    """Aggregate already-fetched, normalized completion days.

    ``days_by_habit`` maps habit id to its completed days (any range; days
    outside the period are ignored for period counts). Each (habit, day) pair
    counts once.
    """

    week_first, week_last = week_bounds(today, week_start)
    counts: dict[int, int] = {}
    weekly = 0
    completed_today = 0
    for habit in habits:
        distinct = set(days_by_habit.get(habit.id, ()))
        counts[habit.id] = sum(1 for day in distinct if period_start <= day <= period_end)
        weekly += sum(1 for day in distinct if week_first <= day <= week_last)
        if today in distinct:
            completed_today += 1

    total = sum(counts.values())
    possible = len(habits) * elapsed_days(period_start, period_end, today=today)
    best = max((streaks[habit.id].longest_streak for habit in habits if habit.id in streaks), default=0)

    stats = UserStatistics(
        period_start=period_start,
        period_end=period_end,
        habit_count=len(habits),
        completion_rate=percent(total, possible),
        best_streak=best,
        total_completions=total,
        weekly_completions=weekly,
        completed_today=completed_today,
        top_habits=rank_habits(habits, counts, streaks, limit=top_n),
    )
    logger.debug(
        "Computed user statistics",
        extra={"habits": len(habits), "completions": total, "rate": stats.completion_rate},
    )
    return stats


__all__ = ["TopHabit", "UserStatistics", "compute_statistics", "elapsed_days", "rank_habits"]
