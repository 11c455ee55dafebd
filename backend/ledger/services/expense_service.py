"""
Expense service for expense-related business logic.
"""
from datetime import datetime
from typing import Iterable, List

from ledger.core.exceptions import InvalidTransition
from ledger.core.money import Money
from ledger.core.utils import to_utc_naive
from ledger.models.expense import Expense, ExpenseType, SplitShare
from ledger.models.lifecycle import Active, Archived, Deleted, is_active
from ledger.services.recurrence_service import apply_recurrence
from ledger.services.split_service import allocate_equal, check_participants, validate_custom_split


def _shares(allocation) -> List[SplitShare]:
    return [SplitShare(user_id=user_id, amount=amount) for user_id, amount in allocation.items()]


def prepare_expense(expense: Expense) -> Expense:
    """
    Fill computed fields before the caller persists an expense.

    Group expenses split between participants without explicit amounts get
    an equal split; explicit amounts are validated as given. Recurring
    expenses get their next occurrence. A ``split_between`` that is present
    must be non-empty and free of duplicates.
    """
    if expense.split_between is not None:
        check_participants(expense.split_between)
    if expense.type == ExpenseType.GROUP and expense.split_between:
        if not expense.split_amounts:
            expense.split_amounts = _shares(allocate_equal(expense.amount, expense.split_between))
    if expense.split_amounts:
        validate_custom_split(
            expense.amount,
            [(share.user_id, share.amount) for share in expense.split_amounts],
        )

    apply_recurrence(expense)
    return expense


def update_split_participants(expense: Expense, participant_ids: List[str]) -> Expense:
    """Replace participants and recompute the equal split."""
    expense.split_between = list(participant_ids)
    expense.split_amounts = _shares(allocate_equal(expense.amount, expense.split_between))
    return expense


def share_of(expense: Expense, user_id: str) -> Money:
    """A participant's share, or zero if they are not part of the split."""
    for share in expense.split_amounts or []:
        if share.user_id == user_id:
            return share.amount
    return Money.zero(expense.amount.currency)


def soft_delete(expense: Expense, now: datetime) -> Expense:
    """Mark deleted, stamping the time. The record is kept for audit."""
    if not isinstance(expense.lifecycle, Deleted):
        expense.lifecycle = Deleted(at=to_utc_naive(now))
    return expense


def archive(expense: Expense) -> Expense:
    if isinstance(expense.lifecycle, Deleted):
        raise InvalidTransition("Deleted expenses cannot be archived")
    expense.lifecycle = Archived()
    return expense


def restore(expense: Expense) -> Expense:
    expense.lifecycle = Active()
    return expense


def active_only(expenses: Iterable[Expense]) -> List[Expense]:
    return [expense for expense in expenses if is_active(expense.lifecycle)]
