"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.category import Category
from ...models.habit import Habit

logger = get_logger(__name__)


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int, *, user_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Category).where(Category.id == category_id, Category.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Category]:
        """List all categories."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.user_id == user_id)
                .order_by(Category.name)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: Category, *, user_id: int) -> Category:
        """Create a new category."""
        with self.session_factory() as session:
            category.user_id = user_id
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def update(self, category: Category, *, user_id: int) -> Category:
        """Update an existing category."""
        with self.session_factory() as session:
            category.user_id = user_id
            category = session.merge(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def delete(self, category_id: int, *, user_id: int) -> bool:
        """Delete a category and clear it from the habits that referenced it."""
        with self.session_factory() as session:
            category = session.exec(
                select(Category).where(Category.id == category_id, Category.user_id == user_id)
            ).first()
            if category is None:
                return False

            habits = session.exec(
                select(Habit)
                .where(Habit.user_id == user_id)
                .where(Habit.category_id == category_id)
            ).all()
            for habit in habits:
                habit.category_id = None
                session.add(habit)
            session.flush()

            session.delete(category)
            session.commit()
        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "user_id": user_id, "detached_habits": len(habits)},
        )
        return True


__all__ = ["SQLModelCategoryRepository"]
