"""SQLModel implementation of the habit and completion store."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session, select

from ...errors import HabitNotFoundError
from ...logging_config import get_logger
from ...models.habit import Completion, Habit

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Habit]:
        """List every habit owned by the user, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at.desc(), Habit.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
        logger.info("Habit created", extra={"habit_id": habit.id, "user_id": user_id})
        return habit

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            habit.updated_at = datetime.now(timezone.utc)
            habit = session.merge(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit; its completions go with it."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return False
            session.delete(habit)
            session.commit()
        logger.info("Habit deleted", extra={"habit_id": habit_id, "user_id": user_id})
        return True

    # Completion operations
    def add_completion(
        self, habit_id: int, completed_date: date, *, user_id: int
    ) -> Completion:
        """Record a completion row; same-day duplicates are stored as-is.

        Raises ``HabitNotFoundError`` when the habit is not owned by ``user_id``.
        """
        with self.session_factory() as session:
            owned = session.exec(
                select(Habit.id).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if owned is None:
                raise HabitNotFoundError(habit_id, user_id=user_id)
            completion = Completion(
                habit_id=habit_id, user_id=user_id, completed_date=completed_date
            )
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
        logger.info(
            "Completion recorded",
            extra={"habit_id": habit_id, "user_id": user_id, "day": completed_date.isoformat()},
        )
        return completion

    def delete_completion(self, completion_id: int, *, habit_id: int, user_id: int) -> bool:
        """Remove a single completion row."""
        with self.session_factory() as session:
            completion = session.exec(
                select(Completion)
                .where(Completion.id == completion_id)
                .where(Completion.habit_id == habit_id)
                .where(Completion.user_id == user_id)
            ).first()
            if completion is None:
                return False
            session.delete(completion)
            session.commit()
            return True

    def get_completions(
        self, habit_id: int, start_date: date, end_date: date, *, user_id: int
    ) -> list[Completion]:
        """Completions inside the inclusive window; callers must not rely on order."""
        with self.session_factory() as session:
            statement = (
                select(Completion)
                .where(Completion.user_id == user_id)
                .where(Completion.habit_id == habit_id)
                .where(Completion.completed_date >= start_date)
                .where(Completion.completed_date <= end_date)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_completions(self, habit_id: int, *, user_id: int) -> list[Completion]:
        """The full completion history of a habit."""
        with self.session_factory() as session:
            statement = (
                select(Completion)
                .where(Completion.user_id == user_id)
                .where(Completion.habit_id == habit_id)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows


__all__ = ["SQLModelHabitRepository"]
