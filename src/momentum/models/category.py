"""Habit category definitions."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

DEFAULT_CATEGORY_COLOR = "#667eea"


class Category(SQLModel, table=True):
    """User-defined grouping for habits."""

    __tablename__: ClassVar[str] = "category"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(index=True, nullable=False, max_length=64)
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, nullable=False, max_length=7)
    icon: Optional[str] = Field(default=None, max_length=32)
