"""
Category model. Categories nest through ``parent_id`` and form a forest.
"""
from typing import Optional
import enum

from pydantic import BaseModel, Field


class CategoryType(str, enum.Enum):
    EXPENSE = "expense"
    INCOME = "income"


class Category(BaseModel):
    id: str
    name: str = Field(max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    icon: str = "📦"
    color: str = Field(default="#3B82F6", pattern=r"^#[0-9A-Fa-f]{6}$")
    type: CategoryType = CategoryType.EXPENSE
    is_default: bool = False
    user_id: Optional[str] = None  # None for system categories
    parent_id: Optional[str] = None

    @property
    def is_system_category(self) -> bool:
        return self.user_id is None
