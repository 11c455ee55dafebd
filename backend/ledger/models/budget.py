"""
Budget model for spending limits over a date window.
"""
from decimal import Decimal
from typing import Optional
import enum

from pydantic import BaseModel, Field, field_validator

from ledger.core.money import Money
from ledger.core.utils import UtcDatetime


class BudgetType(str, enum.Enum):
    PERSONAL = "personal"
    GROUP = "group"
    CATEGORY = "category"


class BudgetPeriod(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BudgetStatus(str, enum.Enum):
    """Budget status enumeration."""
    ACTIVE = "active"
    COMPLETED = "completed"
    EXCEEDED = "exceeded"
    PAUSED = "paused"  # Manual, sticky
    CANCELLED = "cancelled"  # Manual, sticky and terminal


STICKY_STATUSES = frozenset({BudgetStatus.PAUSED, BudgetStatus.CANCELLED})


class BudgetSettings(BaseModel):
    alert_threshold: Decimal = Field(default=Decimal(80), ge=0, le=100)  # Percentage
    is_active: bool = True
    auto_reset: bool = False
    reset_day: Optional[int] = Field(default=None, ge=1, le=31)  # Day of month to reset on


class BudgetStats(BaseModel):
    """Computed spending figures, refreshed by recompute passes only."""
    spent_amount: Decimal = Decimal("0.00")
    remaining_amount: Decimal = Decimal("0.00")
    percentage_used: Decimal = Decimal(0)  # May exceed 100
    days_remaining: int = 0
    average_daily_spent: Decimal = Decimal("0.00")
    last_updated: Optional[UtcDatetime] = None


class Budget(BaseModel):
    """Spending target for a user, group or category over [start_date, end_date]."""
    id: Optional[str] = None
    name: str = Field(default="", max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    amount: Money

    type: BudgetType = BudgetType.PERSONAL
    period: BudgetPeriod = BudgetPeriod.MONTHLY

    # Scope filter
    user_id: str
    group_id: Optional[str] = None
    category_id: Optional[str] = None

    start_date: UtcDatetime
    end_date: UtcDatetime

    settings: BudgetSettings = BudgetSettings()
    stats: BudgetStats = BudgetStats()
    status: BudgetStatus = BudgetStatus.ACTIVE

    @field_validator("amount")
    @classmethod
    def positive_amount(cls, v: Money) -> Money:
        """Amounts are strictly positive."""
        if v.amount <= 0:
            raise ValueError("Budget amount must be greater than zero")
        return v
