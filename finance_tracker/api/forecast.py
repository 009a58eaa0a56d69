"""
Dashboard and net worth forecast endpoints.

Both read every stored record, normalize recurring entries to monthly
amounts and hand the totals to the calculation engine.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from finance_tracker.calculations.forecast import (
    build_forecast,
    summarize_net_worth,
    total_monthly_amount,
)
from finance_tracker.config import get_settings
from finance_tracker.db.database import get_db
from finance_tracker.db.repositories import (
    AssetRepository,
    BankAccountRepository,
    ExpenseRepository,
    IncomeRepository,
    LoanRepository,
    SettingsRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class DashboardResponse(BaseModel):
    """Current financial position."""

    net_worth: float
    assets_total: float
    bank_accounts_total: float
    total_assets: float
    total_liabilities: float
    monthly_income: float
    monthly_expenses: float
    monthly_emis: float


class ForecastPointResponse(BaseModel):
    year: int
    net_worth: float
    net_worth_after_inflation: float

    class Config:
        from_attributes = True


class ForecastResponse(BaseModel):
    """Assumptions, savings figures and the year-by-year projection."""

    initial_net_worth: float
    monthly_income: float
    monthly_expenses: float
    monthly_emis: float
    available_income: float
    monthly_savings: float
    yearly_savings: float
    savings_rate: float
    investment_return: float
    inflation_rate: float
    projection: List[ForecastPointResponse]

    class Config:
        from_attributes = True


def _current_position(db: Session):
    loans = LoanRepository(db).get_all()
    summary = summarize_net_worth(
        AssetRepository(db).get_all(),
        BankAccountRepository(db).get_all(),
        loans,
    )
    monthly_income = total_monthly_amount(IncomeRepository(db).get_all())
    monthly_expenses = total_monthly_amount(ExpenseRepository(db).get_all())
    monthly_emis = sum(loan.emi for loan in loans)
    return summary, monthly_income, monthly_expenses, monthly_emis


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(db: Session = Depends(get_db)):
    """Net worth breakdown and monthly cash flow totals."""
    summary, monthly_income, monthly_expenses, monthly_emis = _current_position(db)

    return DashboardResponse(
        net_worth=summary.net_worth,
        assets_total=summary.assets_total,
        bank_accounts_total=summary.bank_accounts_total,
        total_assets=summary.total_assets,
        total_liabilities=summary.total_liabilities,
        monthly_income=round(monthly_income, 2),
        monthly_expenses=round(monthly_expenses, 2),
        monthly_emis=round(monthly_emis, 2),
    )


@router.get("/forecast", response_model=ForecastResponse)
async def forecast(
    years: Optional[int] = Query(default=None, ge=1, le=100),
    savings_rate: Optional[float] = Query(default=None, ge=0, le=100),
    inflation_rate: Optional[float] = Query(default=None, ge=0, le=20),
    investment_return: Optional[float] = Query(default=None, ge=-10, le=30),
    db: Session = Depends(get_db),
):
    """
    Project net worth forward.

    Assumptions not given in the query fall back to the stored settings.
    """
    stored = SettingsRepository(db).get()
    if years is None:
        years = get_settings().default_projection_years
    if savings_rate is None:
        savings_rate = stored.default_savings_rate
    if inflation_rate is None:
        inflation_rate = stored.default_inflation_rate
    if investment_return is None:
        investment_return = stored.default_investment_return

    summary, monthly_income, monthly_expenses, monthly_emis = _current_position(db)

    logger.debug(
        "Building %d-year forecast from net worth %.2f (savings %.1f%%, return %.1f%%, inflation %.1f%%)",
        years,
        summary.net_worth,
        savings_rate,
        investment_return,
        inflation_rate,
    )

    result = build_forecast(
        initial_net_worth=summary.net_worth,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        monthly_emis=monthly_emis,
        savings_rate=savings_rate,
        investment_return=investment_return,
        inflation_rate=inflation_rate,
        years=years,
    )
    return ForecastResponse.model_validate(result)
