"""
Tests for budget alert evaluation.
"""
import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from ledger.core.config import LedgerDefaults
from ledger.core.money import Money
from ledger.models.budget import Budget, BudgetSettings, BudgetStatus
from ledger.models.notification import NotificationType
from ledger.services.alert_service import budgets_needing_alert, build_budget_alert, should_alert
from ledger.services.budget_service import recompute_budget_stats

NOW = datetime(2024, 3, 15)


def _budget(spent, threshold="80", status=BudgetStatus.ACTIVE, **fields):
    budget = Budget(
        id=fields.pop("id", "b1"),
        name="Groceries",
        user_id="u1",
        amount=Money.of("100.00", "TRY"),
        start_date=datetime(2024, 3, 1),
        end_date=datetime(2024, 3, 31),
        settings=BudgetSettings(alert_threshold=Decimal(threshold), **fields),
        status=status,
    )
    return recompute_budget_stats(budget, [Money.of(spent, "TRY")], NOW)


def test_threshold_boundary_is_inclusive():
    assert should_alert(_budget("80.00"))


def test_below_threshold():
    assert not should_alert(_budget("79.99"))


@pytest.mark.parametrize("status", [BudgetStatus.PAUSED, BudgetStatus.CANCELLED])
def test_only_active_budgets_alert(status):
    assert not should_alert(_budget("95.00", status=status))


def test_exceeded_budget_does_not_alert():
    budget = _budget("120.00")
    assert budget.status == BudgetStatus.EXCEEDED
    assert not should_alert(budget)


def test_zero_threshold_alerts_immediately():
    assert should_alert(_budget("0.00", threshold="0"))


def test_budgets_needing_alert():
    alerting = _budget("85.00", id="alerting")
    quiet = _budget("10.00", id="quiet")
    disabled = _budget("90.00", id="disabled", is_active=False)
    found = budgets_needing_alert([alerting, quiet, disabled], NOW)
    assert [b.id for b in found] == ["alerting"]
    assert budgets_needing_alert([alerting], datetime(2024, 4, 2)) == []


def test_build_budget_alert():
    budget = _budget("85.00")
    draft = build_budget_alert(budget, NOW, defaults=LedgerDefaults(notification_ttl_days=3))
    assert draft.user_id == "u1"
    assert draft.type == NotificationType.BUDGET
    assert draft.related_id == "b1"
    assert draft.action_url == "/budgets/b1"
    assert draft.title == "Groceries is at 85%"
    assert "15.00 TRY left" in draft.message
    assert draft.expires_at == NOW + timedelta(days=3)
