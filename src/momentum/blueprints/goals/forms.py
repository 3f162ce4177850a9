"""Daily goal form definition."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ...models.goal import MAX_TARGET_COMPLETIONS


class DailyGoalForm(BaseModel):
    target_completions: int = Field(ge=1, le=MAX_TARGET_COMPLETIONS)


__all__ = ["DailyGoalForm"]
