"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository
from .goal import SQLModelGoalRepository
from .habit import SQLModelHabitRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelGoalRepository",
    "SQLModelHabitRepository",
    "SQLModelUserRepository",
]
