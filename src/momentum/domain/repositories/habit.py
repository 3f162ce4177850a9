"""Habit and completion store protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Completion, Habit


class HabitRepository(Protocol):
    """Store for habits and their completion rows, always scoped by owner."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, *, user_id: int) -> list[Habit]:
        """List every habit owned by the user, newest first."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit and its completions."""
        ...

    # Completion operations
    def add_completion(
        self, habit_id: int, completed_date: date, *, user_id: int
    ) -> Completion:
        """Record a completion; same-day duplicates are allowed.

        Raises ``HabitNotFoundError`` when the habit belongs to someone else.
        """
        ...

    def delete_completion(self, completion_id: int, *, habit_id: int, user_id: int) -> bool:
        """Remove a single completion row."""
        ...

    def get_completions(
        self, habit_id: int, start_date: date, end_date: date, *, user_id: int
    ) -> list[Completion]:
        """Completions inside the inclusive date window, in no particular order."""
        ...

    def list_completions(self, habit_id: int, *, user_id: int) -> list[Completion]:
        """The full completion history of a habit."""
        ...
