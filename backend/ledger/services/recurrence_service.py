"""
Recurring expense schedule advancement.
"""
from datetime import datetime
from typing import List, NamedTuple, Optional
import logging

from dateutil.relativedelta import relativedelta

from ledger.core.exceptions import RecurrenceMisconfigured
from ledger.core.utils import to_utc_naive
from ledger.models.expense import Expense, Frequency, RecurrencePattern

logger = logging.getLogger(__name__)

# Safety bound for due_occurrences when the caller's clock is far ahead
MAX_DUE_OCCURRENCES = 1000


class RecurrenceAdvance(NamedTuple):
    """Result of advancing a recurrence by one step."""
    next_occurrence: Optional[datetime]
    still_recurring: bool


class DueOccurrences(NamedTuple):
    """Occurrence dates due up to a point in time."""
    occurrences: List[datetime]
    truncated: bool  # More were due than MAX_DUE_OCCURRENCES


def _check_pattern(pattern: Optional[RecurrencePattern]) -> None:
    if pattern is None or pattern.frequency is None:
        raise RecurrenceMisconfigured("Recurring expense has no frequency")
    if pattern.interval is None or pattern.interval <= 0:
        raise RecurrenceMisconfigured(f"Recurrence interval must be positive, got {pattern.interval}")


def step(anchor: datetime, frequency: Frequency, interval: int) -> datetime:
    """
    Add ``interval`` units of ``frequency`` to ``anchor``.

    Months and years are calendar units: Jan 31 + 1 month is the last day of
    February and Feb 29 + 1 year is Feb 28.
    """
    frequency = Frequency(frequency)
    if frequency == Frequency.DAILY:
        return anchor + relativedelta(days=interval)
    if frequency == Frequency.WEEKLY:
        return anchor + relativedelta(weeks=interval)
    if frequency == Frequency.MONTHLY:
        return anchor + relativedelta(months=interval)
    return anchor + relativedelta(years=interval)


def advance_recurrence(anchor: datetime, pattern: RecurrencePattern) -> RecurrenceAdvance:
    """
    Compute the occurrence following ``anchor``.

    If the candidate falls after ``pattern.end_date`` the recurrence stops:
    ``still_recurring`` is False and ``next_occurrence`` is None.
    """
    _check_pattern(pattern)
    candidate = step(to_utc_naive(anchor), pattern.frequency, pattern.interval)
    if pattern.end_date is not None and candidate > to_utc_naive(pattern.end_date):
        return RecurrenceAdvance(next_occurrence=None, still_recurring=False)
    return RecurrenceAdvance(next_occurrence=candidate, still_recurring=True)


def _is_due(candidate: datetime, pattern: RecurrencePattern, now: datetime) -> bool:
    if candidate > now:
        return False
    return pattern.end_date is None or candidate <= to_utc_naive(pattern.end_date)


def due_occurrences(anchor: datetime, pattern: RecurrencePattern, now: datetime) -> DueOccurrences:
    """
    All occurrence dates after ``anchor`` up to and including ``now``.

    Each occurrence is computed from the anchor (``anchor + k * interval``) so
    month-end clamping does not drift, and the list stops at ``end_date``.
    At most ``MAX_DUE_OCCURRENCES`` dates are returned; ``truncated`` is True
    when more were due.
    """
    _check_pattern(pattern)
    anchor, now = to_utc_naive(anchor), to_utc_naive(now)
    occurrences = []
    for k in range(1, MAX_DUE_OCCURRENCES + 1):
        candidate = step(anchor, pattern.frequency, pattern.interval * k)
        if not _is_due(candidate, pattern, now):
            return DueOccurrences(occurrences=occurrences, truncated=False)
        occurrences.append(candidate)

    candidate = step(anchor, pattern.frequency, pattern.interval * (MAX_DUE_OCCURRENCES + 1))
    truncated = _is_due(candidate, pattern, now)
    if truncated:
        logger.warning(f"Due occurrences from {anchor} capped at {MAX_DUE_OCCURRENCES}")
    return DueOccurrences(occurrences=occurrences, truncated=truncated)


def apply_recurrence(expense: Expense) -> Expense:
    """
    Refresh ``expense.recurring_pattern.next_occurrence`` in place.

    An expense whose recurrence ran past its end date is switched off and
    stays off; only ``resume_recurrence`` turns it back on.
    """
    if not expense.is_recurring:
        return expense
    _check_pattern(expense.recurring_pattern)

    result = advance_recurrence(expense.date, expense.recurring_pattern)
    expense.recurring_pattern.next_occurrence = result.next_occurrence
    if not result.still_recurring:
        logger.debug(f"Recurrence for expense {expense.id} ended at {expense.recurring_pattern.end_date}")
        expense.is_recurring = False
    return expense


def resume_recurrence(expense: Expense, pattern: Optional[RecurrencePattern] = None) -> Expense:
    """Explicitly turn recurrence back on, optionally with a new pattern."""
    if pattern is not None:
        expense.recurring_pattern = pattern
    _check_pattern(expense.recurring_pattern)
    expense.is_recurring = True
    return apply_recurrence(expense)
