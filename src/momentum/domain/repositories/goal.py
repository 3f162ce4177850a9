"""Daily goal repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.goal import DailyGoal


class GoalRepository(Protocol):
    """One daily goal per user, created on first access."""

    def get_daily_goal(self, *, user_id: int) -> DailyGoal:
        """Return the user's goal, creating the default one if missing."""
        ...

    def set_daily_goal(self, target_completions: int, *, user_id: int) -> DailyGoal:
        """Insert or update the user's goal."""
        ...
