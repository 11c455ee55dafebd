"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from ledger.api.routes import budgets, categories, groups, recurrence, splits

api_router = APIRouter()

# Include all route modules
api_router.include_router(splits.router)
api_router.include_router(recurrence.router)
api_router.include_router(budgets.router)
api_router.include_router(groups.router)
api_router.include_router(categories.router)
