"""Habit and analytics query form definitions."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...models.habit import DEFAULT_COLOR, Habit
from ...services.dates import normalize


class HabitFrequency(str, Enum):
    """Supported frequency options for habits."""

    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


def _optional_day(value: Any) -> Optional[date]:
    """Blank means "not provided"; anything else must normalize to a day."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return normalize(value)


class HabitForm(BaseModel):
    """Payload for creating or editing a habit."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(description="Short label for the habit", max_length=100)
    description: Optional[str] = Field(default=None, max_length=400)
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY)
    target_count: int = Field(default=1, ge=1, le=100)
    color: str = Field(default=DEFAULT_COLOR, pattern=r"^#[0-9a-fA-F]{6}$")
    category_id: Optional[int] = Field(default=None, ge=1)
    icon: Optional[str] = Field(default=None, max_length=32)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Ensure the habit name is present."""

        if not value:
            raise ValueError("Please provide a habit name.")
        return value

    def to_habit(self, *, user_id: int) -> Habit:
        return self.apply_to(Habit(user_id=user_id, name=self.name))

    def apply_to(self, habit: Habit) -> Habit:
        """Copy the submitted fields onto ``habit``; used for create and edit."""

        habit.name = self.name
        habit.description = self.description or None
        habit.frequency = self.frequency.value
        habit.target_count = self.target_count
        habit.color = self.color
        habit.category_id = self.category_id
        habit.icon = self.icon or None
        return habit


class CompletionForm(BaseModel):
    """Completion payload; the day defaults to today when omitted."""

    completed_date: Optional[date] = None

    @field_validator("completed_date", mode="before")
    @classmethod
    def normalize_day(cls, value: Any) -> Optional[date]:
        return _optional_day(value)


class CompletionRangeQuery(BaseModel):
    """Inclusive window for listing raw completion rows."""

    start_date: date
    end_date: date

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_day(cls, value: Any) -> Optional[date]:
        return _optional_day(value)

    @model_validator(mode="after")
    def ensure_ordered(self) -> "CompletionRangeQuery":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date.")
        return self


class CalendarQuery(BaseModel):
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)


class PeriodQuery(BaseModel):
    """Reporting window; both ends default to the current month."""

    start: Optional[date] = None
    end: Optional[date] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalize_day(cls, value: Any) -> Optional[date]:
        return _optional_day(value)

    @model_validator(mode="after")
    def ensure_ordered(self) -> "PeriodQuery":
        if (self.start is None) != (self.end is None):
            raise ValueError("Provide both start and end, or neither.")
        if self.start and self.end and self.end < self.start:
            raise ValueError("end must not be before start.")
        return self


__all__ = [
    "CalendarQuery",
    "CompletionForm",
    "CompletionRangeQuery",
    "HabitForm",
    "HabitFrequency",
    "PeriodQuery",
]
