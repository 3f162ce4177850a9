"""Repository protocol definitions for domain layer."""

from .category import CategoryRepository
from .goal import GoalRepository
from .habit import HabitRepository

__all__ = [
    "CategoryRepository",
    "GoalRepository",
    "HabitRepository",
]
