"""Habit streak calculations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..logging_config import get_logger

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class StreakSummary:
    """Current and longest run of consecutive completed days."""

    current_streak: int = 0
    longest_streak: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"current_streak": self.current_streak, "longest_streak": self.longest_streak}


def compute_streaks(days: Iterable[date], *, today: date) -> StreakSummary:
    """Return the streak summary for a habit's completed days.

    ``days`` may contain duplicates and arrive in any order. The current
    streak counts back from ``today``; when today has no completion it is 0
    even if every earlier day was completed.
    """

    ordered = sorted(set(days), reverse=True)
    if not ordered:
        return StreakSummary()

    completed = set(ordered)
    current = 0
    cursor = today
    while cursor in completed:
        current += 1
        cursor -= ONE_DAY

    longest = 1
    run = 1
    for newer, older in zip(ordered, ordered[1:]):
        if newer - older == ONE_DAY:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    logger.debug(
        "Computed streaks",
        extra={"days": len(ordered), "current": current, "longest": longest},
    )
    return StreakSummary(current_streak=current, longest_streak=longest)


__all__ = ["StreakSummary", "compute_streaks"]
