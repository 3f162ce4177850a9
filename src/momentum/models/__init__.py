"""SQLModel table exports."""

from .category import Category
from .goal import DailyGoal
from .habit import Completion, Habit
from .user import User

__all__ = [
    "Category",
    "Completion",
    "DailyGoal",
    "Habit",
    "User",
]
