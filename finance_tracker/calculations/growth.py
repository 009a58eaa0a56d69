"""
Growth Calculations

Compound growth of investments and balances, year-by-year wealth
projection and goal-based savings. Rates are annual percentages and may be
negative (depreciation).
"""

from dataclasses import dataclass
from typing import List

from finance_tracker.calculations.amortization import monthly_rate_from_annual


@dataclass
class ProjectionPoint:
    """Net worth at the start of a projection year."""

    year: int
    net_worth: float


def _annuity_factor(monthly_rate: float, total_months: int) -> float:
    """Future value of 1 paid at the end of each month."""
    if monthly_rate == 0:
        return float(total_months)
    return ((1 + monthly_rate) ** total_months - 1) / monthly_rate


def calculate_investment_growth(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate: float,
    years: float,
) -> float:
    """
    Calculate the future value of an investment with monthly contributions.

    Args:
        initial_amount: Lump sum invested at the start
        monthly_contribution: Amount added at the end of every month
        annual_rate: Annual growth rate in percent, compounded monthly
        years: Investment duration in years

    Returns:
        Final value rounded to 2 decimals
    """
    monthly_rate = monthly_rate_from_annual(annual_rate)
    total_months = years * 12

    initial_growth = initial_amount * (1 + monthly_rate) ** total_months
    contribution_growth = monthly_contribution * _annuity_factor(
        monthly_rate, total_months
    )

    return round(initial_growth + contribution_growth, 2)


def generate_wealth_projection(
    initial_net_worth: float,
    yearly_savings: float,
    growth_rate: float,
    years: int,
) -> List[ProjectionPoint]:
    """
    Generate a year-by-year net worth projection.

    Year 0 is the starting net worth as given. Each following year grows
    the previous value by ``growth_rate`` percent and adds
    ``yearly_savings``. Reported values are rounded; the running value is
    not, so long horizons do not drift.

    Args:
        initial_net_worth: Net worth today, may be negative
        yearly_savings: Amount added each year, may be zero or negative
        growth_rate: Annual growth rate in percent
        years: Number of years to project

    Returns:
        List of ``years + 1`` projection points
    """
    projection = []
    current = initial_net_worth

    for year in range(years + 1):
        net_worth = initial_net_worth if year == 0 else round(current, 2)
        projection.append(ProjectionPoint(year=year, net_worth=net_worth))
        current = current * (1 + growth_rate / 100) + yearly_savings

    return projection


def calculate_goal_shortfall(
    target_amount: float,
    current_amount: float,
    years_to_goal: float,
    annual_rate: float,
) -> float:
    """Amount still missing at the goal date if nothing more is saved (unrounded)."""
    total_months = years_to_goal * 12
    monthly_rate = monthly_rate_from_annual(annual_rate)
    return target_amount - current_amount * (1 + monthly_rate) ** total_months


def calculate_monthly_savings_for_goal(
    target_amount: float,
    current_amount: float,
    years_to_goal: float,
    annual_rate: float,
) -> float:
    """
    Calculate the monthly contribution needed to reach a savings goal.

    Returns 0 when the current amount grows past the target on its own.
    """
    amount_to_save = calculate_goal_shortfall(
        target_amount, current_amount, years_to_goal, annual_rate
    )
    if amount_to_save <= 0:
        return 0.0

    monthly_rate = monthly_rate_from_annual(annual_rate)
    return round(amount_to_save / _annuity_factor(monthly_rate, years_to_goal * 12), 2)


def calculate_compound_growth(
    balance: float,
    annual_rate: float,
    years: float,
    compounding_per_year: int = 4,
) -> float:
    """
    Project a balance forward with periodic compounding.

    Bank deposits compound quarterly by default.

    Args:
        balance: Current balance
        annual_rate: Annual interest rate in percent
        years: Years to project; zero or less returns the balance unchanged
        compounding_per_year: Compounding periods per year

    Returns:
        Projected balance rounded to 2 decimals
    """
    if years <= 0:
        return balance

    rate = annual_rate / 100
    return round(
        balance * (1 + rate / compounding_per_year) ** (compounding_per_year * years),
        2,
    )
