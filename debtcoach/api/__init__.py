"""
API routes for the calculation engine.
"""

from fastapi import APIRouter

from debtcoach.api import debts, loans

router = APIRouter()

# Include sub-routers
router.include_router(loans.router, prefix="/loans", tags=["loans"])
router.include_router(debts.router, prefix="/debts", tags=["debts"])
