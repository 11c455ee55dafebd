"""
Pydantic schemas for Budget recomputation.
"""
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal
from ledger.core.money import Money
from ledger.core.utils import UtcDatetime
from ledger.models.budget import Budget
from ledger.models.expense import Expense


class RecomputeRequest(BaseModel):
    """
    Schema for a budget stats refresh.

    Supply either the amounts of the already-matching expenses or the raw
    expenses to be filtered by the budget's scope.
    """
    budget: Budget
    expense_amounts: Optional[List[Money]] = None
    expenses: Optional[List[Expense]] = None
    now: UtcDatetime


class RecomputeResponse(BaseModel):
    """Schema for the recomputed budget with derived alert information."""
    budget: Budget
    should_alert: bool
    progress_color: str


class AlertRequest(BaseModel):
    budget: Budget


class AlertResponse(BaseModel):
    should_alert: bool
    percentage_used: Decimal
    alert_threshold: Decimal


class CategorySummaryRequest(BaseModel):
    """Schema for per-category spending totals."""
    expenses: List[Expense]
    currency: str = "TRY"
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None


class CategorySummaryItem(BaseModel):
    category_id: Optional[str] = None
    total_amount: Decimal
    expense_count: int
    average_amount: Decimal
    percentage: Decimal  # Share of total spending (0-100)
