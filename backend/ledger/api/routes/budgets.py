"""
Budget recomputation routes.
"""
from typing import List

from fastapi import APIRouter, HTTPException, status
from ledger.api.dependencies import ledger_errors
from ledger.schemas.budget import (
    AlertRequest,
    AlertResponse,
    CategorySummaryItem,
    CategorySummaryRequest,
    RecomputeRequest,
    RecomputeResponse,
)
from ledger.services.alert_service import should_alert
from ledger.services.budget_service import (
    progress_color,
    recompute_budget_stats,
    refresh_budget,
    summarize_by_category,
)

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.post("/recompute", response_model=RecomputeResponse)
async def recompute(request: RecomputeRequest):
    """Recompute a budget's stats and status."""
    if (request.expense_amounts is None) == (request.expenses is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide exactly one of expense_amounts or expenses"
        )

    with ledger_errors():
        if request.expenses is not None:
            budget = refresh_budget(request.budget, request.expenses, request.now)
        else:
            budget = recompute_budget_stats(request.budget, request.expense_amounts, request.now)

    return RecomputeResponse(
        budget=budget,
        should_alert=should_alert(budget),
        progress_color=progress_color(budget.stats.percentage_used)
    )


@router.post("/should-alert", response_model=AlertResponse)
async def check_alert(request: AlertRequest):
    """Evaluate the alert predicate on already-computed stats."""
    budget = request.budget
    return AlertResponse(
        should_alert=should_alert(budget),
        percentage_used=budget.stats.percentage_used,
        alert_threshold=budget.settings.alert_threshold
    )


@router.post("/category-summary", response_model=List[CategorySummaryItem])
async def category_summary(request: CategorySummaryRequest):
    """Per-category spending totals for active expenses."""
    with ledger_errors():
        return summarize_by_category(
            request.expenses,
            request.currency.upper(),
            start_date=request.start_date,
            end_date=request.end_date
        )
