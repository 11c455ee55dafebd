"""
Budget aggregation and status derivation.

Recomputation is a pure function of the budget, the matching expense amounts
and the caller's clock; it returns a new Budget and never mutates its input.
Aware datetimes are converted to naive UTC before comparison.
"""
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
import logging
import math

from ledger.core.config import LedgerDefaults, get_defaults
from ledger.core.exceptions import InvalidBudgetAmount, InvalidCurrency, InvalidDateRange, InvalidTransition
from ledger.core.money import ZERO, Money, check_supported, money_sum, round2, subtract_floor_zero
from ledger.core.utils import to_utc_naive
from ledger.models.budget import STICKY_STATUSES, Budget, BudgetSettings, BudgetStats, BudgetStatus
from ledger.models.expense import Expense
from ledger.models.lifecycle import is_active

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def validate_date_range(start_date: datetime, end_date: datetime) -> None:
    start_date, end_date = to_utc_naive(start_date), to_utc_naive(end_date)
    if end_date <= start_date:
        raise InvalidDateRange(f"Budget end date {end_date} must be after start date {start_date}")


def _ceil_days(delta_seconds: float) -> int:
    return math.ceil(delta_seconds / SECONDS_PER_DAY)


def days_remaining(end_date: datetime, now: datetime) -> int:
    return max(0, _ceil_days((to_utc_naive(end_date) - to_utc_naive(now)).total_seconds()))


def days_elapsed(start_date: datetime, now: datetime) -> int:
    return max(0, _ceil_days((to_utc_naive(now) - to_utc_naive(start_date)).total_seconds()))


def matches_scope(budget: Budget, expense: Expense) -> bool:
    """True if an active expense counts toward the budget's spend."""
    if not is_active(expense.lifecycle):
        return False
    if expense.user_id != budget.user_id:
        return False
    if budget.group_id is not None and expense.group_id != budget.group_id:
        return False
    if budget.category_id is not None and expense.category_id != budget.category_id:
        return False
    return budget.start_date <= expense.date <= budget.end_date


def matching_expenses(budget: Budget, expenses: Iterable[Expense]) -> List[Expense]:
    return [expense for expense in expenses if matches_scope(budget, expense)]


def derive_status(budget: Budget, spent: Money, now: datetime) -> BudgetStatus:
    """Apply the status state machine; paused and cancelled are never overridden."""
    if budget.status in STICKY_STATUSES:
        return budget.status

    now = to_utc_naive(now)
    over_budget = spent.amount > budget.amount.amount
    if now > budget.end_date:
        return BudgetStatus.EXCEEDED if over_budget else BudgetStatus.COMPLETED
    if over_budget:
        return BudgetStatus.EXCEEDED
    return BudgetStatus.ACTIVE


def compute_stats(budget: Budget, spent: Money, now: datetime) -> BudgetStats:
    if budget.amount.amount <= 0:
        raise InvalidBudgetAmount(f"Budget amount must be greater than zero, got {budget.amount.amount}")

    now = to_utc_naive(now)
    remaining = subtract_floor_zero(budget.amount, spent)
    percentage_used = spent.amount * 100 / budget.amount.amount
    elapsed = days_elapsed(budget.start_date, now)
    average = round2(spent.amount / elapsed) if elapsed > 0 else ZERO

    return BudgetStats(
        spent_amount=spent.amount,
        remaining_amount=remaining.amount,
        percentage_used=percentage_used,
        days_remaining=days_remaining(budget.end_date, now),
        average_daily_spent=average,
        last_updated=now,
    )


def recompute_budget_stats(
    budget: Budget,
    matching_expense_amounts: Iterable[Money],
    now: datetime,
) -> Budget:
    """
    Recompute stats and status from the amounts of the matching expenses.

    The caller supplies the already-filtered, non-deleted expense amounts
    (see ``matching_expenses``). Amounts in a currency other than the budget's
    raise InvalidCurrency.
    """
    validate_date_range(budget.start_date, budget.end_date)
    try:
        spent = money_sum(matching_expense_amounts, currency=budget.amount.currency)
    except InvalidCurrency as e:
        raise InvalidCurrency(f"Budget {budget.id} is in {budget.amount.currency}: {e}") from e

    stats = compute_stats(budget, spent, now)
    status = derive_status(budget, spent, now)
    if status != budget.status:
        logger.debug(f"Budget {budget.id} status {budget.status.value} -> {status.value}")
    return budget.model_copy(update={"stats": stats, "status": status})


def refresh_budget(budget: Budget, expenses: Iterable[Expense], now: datetime) -> Budget:
    """Filter ``expenses`` by the budget's scope, then recompute."""
    return recompute_budget_stats(
        budget,
        [expense.amount for expense in matching_expenses(budget, expenses)],
        now,
    )


def pause_budget(budget: Budget) -> Budget:
    """Manual pause; recomputation leaves the status alone until resumed."""
    if budget.status == BudgetStatus.PAUSED:
        return budget
    if budget.status not in (BudgetStatus.ACTIVE, BudgetStatus.EXCEEDED):
        raise InvalidTransition(f"Cannot pause a budget that is {budget.status.value}")
    return budget.model_copy(update={"status": BudgetStatus.PAUSED})


def resume_budget(budget: Budget, matching_expense_amounts: Iterable[Money], now: datetime) -> Budget:
    """Lift a pause and let the state machine pick the status again."""
    if budget.status != BudgetStatus.PAUSED:
        raise InvalidTransition(f"Only paused budgets can be resumed, status is {budget.status.value}")
    return recompute_budget_stats(
        budget.model_copy(update={"status": BudgetStatus.ACTIVE}),
        matching_expense_amounts,
        now,
    )


def cancel_budget(budget: Budget) -> Budget:
    """Manual, terminal cancellation."""
    if budget.status == BudgetStatus.CANCELLED:
        return budget
    if budget.status == BudgetStatus.COMPLETED:
        raise InvalidTransition("Completed budgets cannot be cancelled")
    return budget.model_copy(update={"status": BudgetStatus.CANCELLED})


def progress_color(percentage_used: Decimal) -> str:
    """Hex colour for a progress bar at the given percentage."""
    if percentage_used >= 100:
        return "#EF4444"  # Red
    if percentage_used >= 80:
        return "#F59E0B"  # Amber
    if percentage_used >= 60:
        return "#3B82F6"  # Blue
    return "#10B981"  # Green


def summarize_by_category(
    expenses: Iterable[Expense],
    currency: str,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List[Dict]:
    """
    Per-category totals for active expenses inside the optional window.

    Returns dicts with category_id, total_amount, expense_count,
    average_amount and percentage (share of the overall total), sorted by
    total descending.
    """
    start_date, end_date = to_utc_naive(start_date), to_utc_naive(end_date)
    totals: Dict[Optional[str], List[Money]] = {}
    for expense in expenses:
        if not is_active(expense.lifecycle):
            continue
        if start_date is not None and expense.date < start_date:
            continue
        if end_date is not None and expense.date > end_date:
            continue
        totals.setdefault(expense.category_id, []).append(expense.amount)

    grand_total = ZERO
    summaries = []
    for category_id, amounts in totals.items():
        total = money_sum(amounts, currency=currency)
        grand_total += total.amount
        summaries.append({
            "category_id": category_id,
            "total_amount": total.amount,
            "expense_count": len(amounts),
            "average_amount": round2(total.amount / len(amounts)),
        })

    for item in summaries:
        item["percentage"] = round2(item["total_amount"] * 100 / grand_total) if grand_total > 0 else ZERO

    summaries.sort(key=lambda item: item["total_amount"], reverse=True)
    return summaries


def create_budget(
    user_id: str,
    amount: Money,
    start_date: datetime,
    end_date: datetime,
    now: datetime,
    defaults: Optional[LedgerDefaults] = None,
    **fields,
) -> Budget:
    """
    Build a new budget with configured defaults and an initial stats pass.

    Extra keyword arguments (name, type, period, group_id, category_id,
    settings) are passed through to the Budget model.
    """
    defaults = defaults or get_defaults()
    check_supported(amount.currency, defaults.supported_currencies)
    validate_date_range(start_date, end_date)
    if amount.amount <= 0:
        raise InvalidBudgetAmount(f"Budget amount must be greater than zero, got {amount.amount}")

    fields.setdefault("settings", BudgetSettings(alert_threshold=defaults.default_alert_threshold))
    budget = Budget(
        user_id=user_id,
        amount=amount,
        start_date=start_date,
        end_date=end_date,
        **fields,
    )
    return recompute_budget_stats(budget, [], now)
