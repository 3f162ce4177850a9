"""Daily completion goal stored per user."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

DEFAULT_TARGET_COMPLETIONS = 3
MAX_TARGET_COMPLETIONS = 20


class DailyGoal(SQLModel, table=True):
    """How many habit completions a user aims for each day."""

    __tablename__: ClassVar[str] = "daily_goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, unique=True, index=True)
    target_completions: int = Field(default=DEFAULT_TARGET_COMPLETIONS, nullable=False)
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
