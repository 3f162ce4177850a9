"""Category form definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.category import DEFAULT_CATEGORY_COLOR, Category

_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class CategoryForm(BaseModel):
    """Payload for creating a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(max_length=64)
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, pattern=_COLOR_PATTERN)
    icon: Optional[str] = Field(default=None, max_length=32)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a category name.")
        return value

    def to_category(self, *, user_id: int) -> Category:
        return Category(user_id=user_id, name=self.name, color=self.color, icon=self.icon or None)


class CategoryUpdateForm(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    color: Optional[str] = Field(default=None, pattern=_COLOR_PATTERN)
    icon: Optional[str] = Field(default=None, max_length=32)

    def apply_to(self, category: Category) -> Category:
        for key, value in self.model_dump(exclude_none=True).items():
            setattr(category, key, value)
        return category


__all__ = ["CategoryForm", "CategoryUpdateForm"]
