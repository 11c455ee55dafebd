"""
Category hierarchy routes.
"""
from fastapi import APIRouter
from ledger.api.dependencies import ledger_errors
from ledger.schemas.category import ForestRequest, ForestResponse
from ledger.services.category_service import CategoryForest

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("/validate", response_model=ForestResponse)
async def validate_forest(request: ForestRequest):
    """Check the categories form a forest, optionally after a re-parent."""
    with ledger_errors():
        forest = CategoryForest(request.categories)
        ancestors = []
        if request.category_id is not None:
            forest.reparent(request.category_id, request.new_parent_id)
            ancestors = forest.ancestors(request.category_id)

    return ForestResponse(
        valid=True,
        roots=[category.id for category in forest.roots()],
        ancestors=ancestors
    )
