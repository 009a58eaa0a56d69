"""
Net Worth and Forecast Calculations

Aggregates stored records into a net worth summary and monthly cash flow
totals, then projects net worth forward with savings, investment return
and inflation assumptions.

Functions accept any objects exposing the relevant attributes (ORM rows,
dataclasses, simple namespaces), so the engine stays independent of the
record store.
"""

import enum
from dataclasses import dataclass, field
from typing import Iterable, List

from finance_tracker.calculations.growth import generate_wealth_projection

WEEKS_PER_MONTH = 4.33


class Frequency(str, enum.Enum):
    """Recurrence of an income or expense entry."""

    ONE_TIME = "ONE_TIME"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    HALF_YEARLY = "HALF_YEARLY"
    YEARLY = "YEARLY"


# Multiplier converting an amount at the given frequency to a monthly amount
MONTHLY_FACTORS = {
    Frequency.ONE_TIME: 0.0,
    Frequency.WEEKLY: WEEKS_PER_MONTH,
    Frequency.MONTHLY: 1.0,
    Frequency.QUARTERLY: 1 / 3,
    Frequency.HALF_YEARLY: 1 / 6,
    Frequency.YEARLY: 1 / 12,
}


@dataclass
class NetWorthSummary:
    """Point-in-time totals behind the net worth figure."""

    assets_total: float
    bank_accounts_total: float
    total_assets: float
    total_liabilities: float
    net_worth: float


@dataclass
class ForecastPoint:
    """Projected net worth for one year, nominal and in today's money."""

    year: int
    net_worth: float
    net_worth_after_inflation: float


@dataclass
class Forecast:
    """Savings assumptions and the resulting net worth projection."""

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
    projection: List[ForecastPoint] = field(default_factory=list)


def to_monthly_amount(amount: float, frequency) -> float:
    """
    Normalize a recurring amount to its monthly equivalent.

    One-time amounts contribute nothing to monthly totals.
    """
    return amount * MONTHLY_FACTORS[Frequency(frequency)]


def total_monthly_amount(entries: Iterable) -> float:
    """Sum the monthly equivalents of income or expense entries."""
    return sum(to_monthly_amount(e.amount, e.frequency) for e in entries)


def summarize_net_worth(
    assets: Iterable, bank_accounts: Iterable, loans: Iterable
) -> NetWorthSummary:
    """
    Calculate net worth from assets, bank accounts and loans.

    Only bank accounts flagged ``is_asset`` count toward assets. Loans
    count at their full principal.
    """
    assets_total = sum(a.current_value for a in assets)
    bank_accounts_total = sum(b.balance for b in bank_accounts if b.is_asset)
    total_assets = assets_total + bank_accounts_total
    total_liabilities = sum(loan.principal for loan in loans)

    return NetWorthSummary(
        assets_total=round(assets_total, 2),
        bank_accounts_total=round(bank_accounts_total, 2),
        total_assets=round(total_assets, 2),
        total_liabilities=round(total_liabilities, 2),
        net_worth=round(total_assets - total_liabilities, 2),
    )


def calculate_monthly_savings(
    monthly_income: float,
    monthly_expenses: float,
    monthly_emis: float,
    savings_rate: float,
) -> float:
    """
    Calculate the monthly amount saved out of available income.

    Available income is income less expenses and EMIs. Nothing is saved
    when it is zero or negative.
    """
    available_income = monthly_income - monthly_expenses - monthly_emis
    if available_income <= 0:
        return 0.0
    return available_income * savings_rate / 100


def build_forecast(
    initial_net_worth: float,
    monthly_income: float,
    monthly_expenses: float,
    monthly_emis: float,
    savings_rate: float,
    investment_return: float,
    inflation_rate: float,
    years: int,
) -> Forecast:
    """
    Build a net worth forecast.

    Args:
        initial_net_worth: Net worth today
        monthly_income: Normalized monthly income
        monthly_expenses: Normalized monthly expenses
        monthly_emis: Sum of monthly loan installments
        savings_rate: Percent of available income saved
        investment_return: Annual return on net worth in percent
        inflation_rate: Annual inflation in percent, used to deflate values
        years: Projection horizon in years

    Returns:
        Forecast with ``years + 1`` projection points
    """
    available_income = monthly_income - monthly_expenses - monthly_emis
    monthly_savings = calculate_monthly_savings(
        monthly_income, monthly_expenses, monthly_emis, savings_rate
    )
    yearly_savings = monthly_savings * 12

    projection = []
    for point in generate_wealth_projection(
        initial_net_worth, yearly_savings, investment_return, years
    ):
        inflation_factor = (1 + inflation_rate / 100) ** point.year
        projection.append(
            ForecastPoint(
                year=point.year,
                net_worth=point.net_worth,
                net_worth_after_inflation=round(point.net_worth / inflation_factor, 2),
            )
        )

    return Forecast(
        initial_net_worth=initial_net_worth,
        monthly_income=round(monthly_income, 2),
        monthly_expenses=round(monthly_expenses, 2),
        monthly_emis=round(monthly_emis, 2),
        available_income=round(available_income, 2),
        monthly_savings=round(monthly_savings, 2),
        yearly_savings=round(yearly_savings, 2),
        savings_rate=savings_rate,
        investment_return=investment_return,
        inflation_rate=inflation_rate,
        projection=projection,
    )
