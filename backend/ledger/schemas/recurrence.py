"""
Pydantic schemas for recurrence scheduling.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from ledger.core.utils import UtcDatetime
from ledger.models.expense import RecurrencePattern


class AdvanceRequest(BaseModel):
    """Schema for advancing a recurrence from its anchor date."""
    date: UtcDatetime
    pattern: RecurrencePattern


class AdvanceResponse(BaseModel):
    next_occurrence: Optional[datetime] = None
    still_recurring: bool


class DueRequest(AdvanceRequest):
    """Schema for listing occurrences due up to ``now``."""
    now: UtcDatetime


class DueResponse(BaseModel):
    occurrences: List[datetime]
    truncated: bool = False  # More occurrences were due than returned
