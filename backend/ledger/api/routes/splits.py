"""
Split allocation routes.
"""
from fastapi import APIRouter, Depends
from ledger.api.dependencies import get_ledger_defaults, ledger_errors
from ledger.core.config import LedgerDefaults
from ledger.core.money import Money, check_supported
from ledger.schemas.split import ShareResponse, SplitRequest, SplitResponse
from ledger.services.split_service import allocate_with_method

router = APIRouter(prefix="/splits", tags=["splits"])


@router.post("", response_model=SplitResponse)
async def allocate(
    request: SplitRequest,
    defaults: LedgerDefaults = Depends(get_ledger_defaults)
):
    """Allocate an expense amount between participants."""
    with ledger_errors():
        currency = check_supported(request.currency, defaults.supported_currencies)
        amount = Money(amount=request.amount, currency=currency)

        explicit_amounts = None
        if request.amounts is not None:
            explicit_amounts = [
                (item.user_id, Money(amount=item.amount, currency=currency))
                for item in request.amounts
            ]
        percentages = None
        if request.percentages is not None:
            percentages = [(item.user_id, item.percentage) for item in request.percentages]

        shares = allocate_with_method(
            request.method,
            amount,
            request.participant_ids,
            explicit_amounts=explicit_amounts,
            percentages=percentages,
        )

    return SplitResponse(
        method=request.method,
        currency=currency,
        total=amount.amount,
        shares=[ShareResponse(user_id=user_id, amount=share.amount) for user_id, share in shares.items()]
    )
