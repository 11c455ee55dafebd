"""
Pydantic schemas for split allocation.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from ledger.models.group import SplitMethod


class ParticipantAmount(BaseModel):
    """Explicit amount for one participant (custom split)."""
    user_id: str
    amount: Decimal = Field(ge=0, decimal_places=2)


class ParticipantPercentage(BaseModel):
    """Percentage weight for one participant (percentage split)."""
    user_id: str
    percentage: Decimal = Field(ge=0, le=100)


class SplitRequest(BaseModel):
    """Schema for a split allocation request."""
    amount: Decimal = Field(gt=0, le=Decimal("999999999.99"), decimal_places=2)
    currency: str = Field(default="TRY", pattern=r"^[A-Za-z]{3}$")
    method: SplitMethod = SplitMethod.EQUAL
    participant_ids: List[str] = []  # Used by equal split, in order
    amounts: Optional[List[ParticipantAmount]] = None  # Used by custom split
    percentages: Optional[List[ParticipantPercentage]] = None  # Used by percentage split


class ShareResponse(BaseModel):
    user_id: str
    amount: Decimal


class SplitResponse(BaseModel):
    """Schema for a split allocation response."""
    method: SplitMethod
    currency: str
    total: Decimal
    shares: List[ShareResponse]
