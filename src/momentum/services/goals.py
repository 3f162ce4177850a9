"""Daily goal progress."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .calendar import percent


@dataclass(frozen=True, slots=True)
class GoalProgress:
    target: int
    completed_today: int
    percent: int
    is_complete: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_completions": self.target,
            "completed_today": self.completed_today,
            "percent": self.percent,
            "is_complete": self.is_complete,
        }


def goal_progress(target: int, completed_today: int) -> GoalProgress:
    """Progress towards the daily target; the percentage is capped at 100."""

    return GoalProgress(
        target=target,
        completed_today=completed_today,
        percent=min(percent(completed_today, target), 100),
        is_complete=target > 0 and completed_today >= target,
    )


__all__ = ["GoalProgress", "goal_progress"]
