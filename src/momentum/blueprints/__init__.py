"""Blueprint exports."""

from . import categories, goals, habits

__all__ = [
    "categories",
    "goals",
    "habits",
]
