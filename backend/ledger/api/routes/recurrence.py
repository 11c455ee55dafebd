"""
Recurring expense scheduling routes.
"""
from fastapi import APIRouter
from ledger.api.dependencies import ledger_errors
from ledger.schemas.recurrence import AdvanceRequest, AdvanceResponse, DueRequest, DueResponse
from ledger.services.recurrence_service import advance_recurrence, due_occurrences

router = APIRouter(prefix="/recurrence", tags=["recurrence"])


@router.post("/advance", response_model=AdvanceResponse)
async def advance(request: AdvanceRequest):
    """Compute the next occurrence after the anchor date."""
    with ledger_errors():
        result = advance_recurrence(request.date, request.pattern)
    return AdvanceResponse(
        next_occurrence=result.next_occurrence,
        still_recurring=result.still_recurring
    )


@router.post("/due", response_model=DueResponse)
async def due(request: DueRequest):
    """List occurrences between the anchor date and now."""
    with ledger_errors():
        result = due_occurrences(request.date, request.pattern, request.now)
    return DueResponse(occurrences=result.occurrences, truncated=result.truncated)
