"""Models package - domain records the engine computes over."""
from ledger.models.lifecycle import Active, Archived, Deleted, Lifecycle
from ledger.models.expense import Expense, ExpenseType, Frequency, RecurrencePattern, SplitShare
from ledger.models.budget import (
    Budget,
    BudgetPeriod,
    BudgetSettings,
    BudgetStats,
    BudgetStatus,
    BudgetType,
)
from ledger.models.group import Group, GroupMember, GroupSettings, GroupStats, MemberRole, SplitMethod
from ledger.models.category import Category, CategoryType
from ledger.models.notification import NotificationDraft, NotificationType

__all__ = [
    "Active",
    "Archived",
    "Deleted",
    "Lifecycle",
    "Expense",
    "ExpenseType",
    "Frequency",
    "RecurrencePattern",
    "SplitShare",
    "Budget",
    "BudgetPeriod",
    "BudgetSettings",
    "BudgetStats",
    "BudgetStatus",
    "BudgetType",
    "Group",
    "GroupMember",
    "GroupSettings",
    "GroupStats",
    "MemberRole",
    "SplitMethod",
    "Category",
    "CategoryType",
    "NotificationDraft",
    "NotificationType",
]
