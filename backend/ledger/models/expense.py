"""
Expense model for tracking spending.
"""
from typing import List, Optional
import enum

from pydantic import BaseModel, Field

from ledger.core.money import Money
from ledger.core.utils import UtcDatetime
from ledger.models.lifecycle import Active, Lifecycle


class ExpenseType(str, enum.Enum):
    """Expense type enumeration."""
    PERSONAL = "personal"
    GROUP = "group"


class Frequency(str, enum.Enum):
    """Recurrence frequency enumeration."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RecurrencePattern(BaseModel):
    """How often a recurring expense repeats."""
    frequency: Optional[Frequency] = None
    interval: int = 1  # Units of frequency between occurrences
    end_date: Optional[UtcDatetime] = None
    next_occurrence: Optional[UtcDatetime] = None  # Computed


class SplitShare(BaseModel):
    """One participant's share of a group expense."""
    user_id: str
    amount: Money


class Expense(BaseModel):
    """A single spending event, personal or shared within a group."""
    id: Optional[str] = None
    title: str = Field(default="", max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    amount: Money
    date: UtcDatetime
    category_id: Optional[str] = None
    type: ExpenseType = ExpenseType.PERSONAL

    user_id: str
    group_id: Optional[str] = None

    # Group expense
    paid_by: Optional[str] = None
    split_between: Optional[List[str]] = None  # Ordered participant IDs
    split_amounts: Optional[List[SplitShare]] = None

    tags: List[str] = []

    is_recurring: bool = False
    recurring_pattern: Optional[RecurrencePattern] = None

    lifecycle: Lifecycle = Active()

    @property
    def status(self) -> str:
        return self.lifecycle.state

    @property
    def is_group_expense(self) -> bool:
        return self.type == ExpenseType.GROUP and self.group_id is not None
