"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

DEFAULT_COLOR = "#3b82f6"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A recurring habit owned by one user."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=400)
    frequency: str = Field(default="daily", nullable=False, max_length=16)
    target_count: int = Field(default=1, nullable=False, ge=1)
    color: str = Field(default=DEFAULT_COLOR, nullable=False, max_length=7)
    # Advisory reference: deleting a category clears it instead of cascading.
    category_id: Optional[int] = Field(default=None, foreign_key="category.id", index=True)
    icon: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    completions: list["Completion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "Completion", back_populates="habit", cascade="all, delete-orphan"
        ),
    )


class Completion(SQLModel, table=True):
    """One completion event for a habit on a calendar day.

    The table does not enforce one row per (habit, day); analytics collapse
    same-day duplicates.
    """

    __tablename__: ClassVar[str] = "completion"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    completed_date: date = Field(nullable=False, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )
