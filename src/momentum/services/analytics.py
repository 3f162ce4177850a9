"""Analytics operations over the completion store.

``HabitAnalytics`` is the entry point used by the HTTP blueprints and the CLI.
It fetches raw rows through the repositories, normalizes them to calendar
days and hands them to the pure calculators. Nothing is cached between calls.
"""

from __future__ import annotations

import calendar
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, Optional, Sequence

from ..domain.repositories import GoalRepository, HabitRepository
from ..errors import HabitNotFoundError
from ..logging_config import get_logger
from ..models.habit import Habit
from .calendar import CalendarMonth, grid_bounds, project_calendar
from .dates import DateLike, completion_days, month_bounds, normalize
from .goals import GoalProgress, goal_progress
from .habits import StreakSummary, compute_streaks
from .statistics import TOP_HABITS_LIMIT, UserStatistics, compute_statistics

logger = get_logger(__name__)


class HabitAnalytics:
    """Streaks, calendars and statistics for one store."""

    def __init__(
        self,
        habit_repo: HabitRepository,
        goal_repo: GoalRepository,
        *,
        clock: Callable[[], DateLike] = date.today,
        week_start: int = calendar.SUNDAY,
        top_n: int = TOP_HABITS_LIMIT,
        fetch_workers: int = 4,
    ):
        self.habit_repo = habit_repo
        self.goal_repo = goal_repo
        self.clock = clock
        self.week_start = week_start
        self.top_n = top_n
        self.fetch_workers = fetch_workers

    def today(self) -> date:
        """The caller's current calendar day, normalized like every completion."""
        return normalize(self.clock())

    def _require_habit(self, habit_id: int, *, user_id: int) -> Habit:
        habit = self.habit_repo.get_by_id(habit_id, user_id=user_id)
        if habit is None:
            raise HabitNotFoundError(habit_id, user_id=user_id)
        return habit

    def compute_streak(self, habit_id: int, *, user_id: int) -> StreakSummary:
        self._require_habit(habit_id, user_id=user_id)
        rows = self.habit_repo.list_completions(habit_id, user_id=user_id)
        return compute_streaks(completion_days(rows), today=self.today())

    def project_calendar(
        self, habit_id: int, year: int, month: int, *, user_id: int
    ) -> CalendarMonth:
        self._require_habit(habit_id, user_id=user_id)
        # Fetch the whole grid so padding cells from adjacent months are flagged too.
        grid_start, grid_end = grid_bounds(year, month, week_start=self.week_start)
        rows = self.habit_repo.get_completions(habit_id, grid_start, grid_end, user_id=user_id)
        return project_calendar(
            year,
            month,
            completion_days(rows),
            today=self.today(),
            week_start=self.week_start,
        )

    def _fetch_histories(self, habits: Sequence[Habit], *, user_id: int) -> dict[int, set[date]]:
        """Completion days per habit; returns only once every fetch has finished."""

        def fetch(habit: Habit) -> set[date]:
            return completion_days(self.habit_repo.list_completions(habit.id, user_id=user_id))

        if self.fetch_workers <= 1 or len(habits) <= 1:
            results = [fetch(habit) for habit in habits]
        else:
            with ThreadPoolExecutor(max_workers=self.fetch_workers) as executor:
                results = list(executor.map(fetch, habits))
        return {habit.id: days for habit, days in zip(habits, results)}

    def compute_user_statistics(
        self, user_id: int, period_start: DateLike, period_end: DateLike
    ) -> UserStatistics:
        start = normalize(period_start)
        end = normalize(period_end)
        if end < start:
            raise ValueError(f"period_end {end} is before period_start {start}")

        today = self.today()
        habits = self.habit_repo.list_all(user_id=user_id)
        days_by_habit = self._fetch_histories(habits, user_id=user_id)
        streaks = {
            habit_id: compute_streaks(days, today=today)
            for habit_id, days in days_by_habit.items()
        }

        logger.info(
            "Computing user statistics",
            extra={"user_id": user_id, "habits": len(habits), "start": start.isoformat(), "end": end.isoformat()},
        )
        return compute_statistics(
            habits,
            days_by_habit,
            streaks,
            period_start=start,
            period_end=end,
            today=today,
            top_n=self.top_n,
            week_start=self.week_start,
        )

    def month_statistics(
        self, user_id: int, year: Optional[int] = None, month: Optional[int] = None
    ) -> UserStatistics:
        """Statistics for a calendar month, the current one by default."""

        today = self.today()
        start, end = month_bounds(year or today.year, month or today.month)
        return self.compute_user_statistics(user_id, start, end)

    def daily_goal(self, user_id: int) -> GoalProgress:
        today = self.today()
        goal = self.goal_repo.get_daily_goal(user_id=user_id)
        completed_today = sum(
            1
            for habit in self.habit_repo.list_all(user_id=user_id)
            if self.habit_repo.get_completions(habit.id, today, today, user_id=user_id)
        )
        return goal_progress(goal.target_completions, completed_today)


__all__ = ["HabitAnalytics"]
