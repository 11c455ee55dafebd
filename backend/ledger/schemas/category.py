"""
Pydantic schemas for category hierarchy checks.
"""
from pydantic import BaseModel
from typing import List, Optional
from ledger.models.category import Category


class ForestRequest(BaseModel):
    """Existing categories plus an optional re-parent to validate."""
    categories: List[Category]
    category_id: Optional[str] = None
    new_parent_id: Optional[str] = None


class ForestResponse(BaseModel):
    valid: bool
    roots: List[str]
    ancestors: List[str] = []  # Of category_id after the change
