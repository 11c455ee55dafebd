"""
Budget alert evaluation and notification drafting.
"""
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from ledger.core.config import LedgerDefaults, get_defaults
from ledger.core.utils import to_utc_naive
from ledger.models.budget import Budget, BudgetStatus
from ledger.models.notification import DEFAULT_ICONS, NotificationDraft, NotificationType


def should_alert(budget: Budget) -> bool:
    """Alert while active once usage reaches the threshold (boundary inclusive)."""
    return (
        budget.status == BudgetStatus.ACTIVE
        and budget.stats.percentage_used >= budget.settings.alert_threshold
    )


def budgets_needing_alert(budgets: Iterable[Budget], now: datetime) -> List[Budget]:
    """Active, enabled budgets whose window contains ``now`` and that should alert."""
    now = to_utc_naive(now)
    return [
        budget for budget in budgets
        if budget.status == BudgetStatus.ACTIVE
        and budget.settings.is_active
        and budget.start_date <= now <= budget.end_date
        and should_alert(budget)
    ]


def build_budget_alert(
    budget: Budget,
    now: datetime,
    defaults: Optional[LedgerDefaults] = None,
) -> NotificationDraft:
    """Draft the notification a collaborator stores when ``should_alert`` is true."""
    defaults = defaults or get_defaults()
    percentage = budget.stats.percentage_used.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    name = budget.name or "Your budget"
    return NotificationDraft(
        user_id=budget.user_id,
        title=f"{name} is at {percentage}%"[:100],
        message=(
            f"You have spent {budget.stats.spent_amount:.2f} of "
            f"{budget.amount.amount:.2f} {budget.amount.currency}. "
            f"{budget.stats.remaining_amount:.2f} {budget.amount.currency} left "
            f"with {budget.stats.days_remaining} days remaining."
        ),
        type=NotificationType.BUDGET,
        related_id=budget.id,
        related_type="budget",
        icon=DEFAULT_ICONS[NotificationType.BUDGET],
        action_url=f"/budgets/{budget.id}" if budget.id else None,
        expires_at=now + timedelta(days=defaults.notification_ttl_days),
    )
