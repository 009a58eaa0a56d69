"""
API routes for the finance tracker.
"""

from fastapi import APIRouter

from finance_tracker.api import records, bank_accounts, loans, settings, calculations, forecast

router = APIRouter()

# Include sub-routers
router.include_router(records.assets_router, prefix="/assets", tags=["assets"])
router.include_router(bank_accounts.router, prefix="/bank-accounts", tags=["bank accounts"])
router.include_router(records.incomes_router, prefix="/incomes", tags=["incomes"])
router.include_router(records.expenses_router, prefix="/expenses", tags=["expenses"])
router.include_router(loans.router, prefix="/loans", tags=["loans"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])

# Dashboard and forecast live directly at /api/dashboard and /api/forecast
router.include_router(forecast.router, tags=["forecast"])
