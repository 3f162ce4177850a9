"""Domain exceptions raised by the analytics services and repositories."""

from __future__ import annotations


class MomentumError(Exception):
    """Base class for errors raised by Momentum itself."""


class MalformedDateError(MomentumError, ValueError):
    """A completion date could not be reduced to a calendar day."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Cannot interpret {value!r} as a calendar day")


class HabitNotFoundError(MomentumError, LookupError):
    """The habit does not exist or belongs to another user."""

    def __init__(self, habit_id: int, *, user_id: int):
        self.habit_id = habit_id
        self.user_id = user_id
        super().__init__(f"Habit {habit_id} not found for user {user_id}")


__all__ = ["HabitNotFoundError", "MalformedDateError", "MomentumError"]
