"""
Loan Amortization Calculations

Implements EMI, amortization schedule and prepayment impact calculations
for fixed-rate amortizing loans. Rates are annual percentages (8.5 = 8.5%)
and every month is treated as one uniform period.

Inputs are trusted: a non-positive tenure or principal is a caller
contract violation and produces non-finite results or math errors rather
than a validation error.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta


@dataclass
class AmortizationRow:
    """One month of an amortization schedule."""

    month: int
    emi: float
    principal_payment: float
    interest_payment: float
    remaining_principal: float
    payment_date: Optional[date] = None


@dataclass
class PrepaymentImpact:
    """Effect of a lump-sum prepayment on a loan.

    ``reduced_emi`` holds the tenure constant, ``reduced_tenure`` holds the
    EMI constant. The two are alternative strategies.
    """

    original_emi: float
    original_tenure: int
    reduced_emi: float
    reduced_tenure: int
    interest_saved: float
    tenure_saved: int


def monthly_rate_from_annual(annual_rate: float) -> float:
    """Convert an annual percentage rate to a monthly decimal rate."""
    return annual_rate / 100 / 12


def _exact_emi(principal: float, monthly_rate: float, tenure_months: int) -> float:
    if monthly_rate == 0:
        return principal / tenure_months

    factor = (1 + monthly_rate) ** tenure_months
    return principal * monthly_rate * factor / (factor - 1)


def calculate_emi(
    principal: float, annual_rate: float, tenure_months: int
) -> float:
    """
    Calculate the equated monthly installment of a loan.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent (e.g., 8.5 for 8.5%)
        tenure_months: Loan tenure in months, must be positive

    Returns:
        Monthly payment rounded to 2 decimals
    """
    monthly_rate = monthly_rate_from_annual(annual_rate)
    return round(_exact_emi(principal, monthly_rate, tenure_months), 2)


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    tenure_months: int,
    start_date: Optional[date] = None,
) -> List[AmortizationRow]:
    """
    Generate a month-by-month amortization schedule.

    The payment is computed once without rounding and the balance is
    carried forward unrounded, so rounding never accumulates. The final
    month pays off whatever balance is left and always reports a
    remaining principal of exactly zero.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent
        tenure_months: Loan tenure in months
        start_date: Date of the first payment; rows are dated when given

    Returns:
        List of ``tenure_months`` rows
    """
    monthly_rate = monthly_rate_from_annual(annual_rate)
    exact_emi = _exact_emi(principal, monthly_rate, tenure_months)

    schedule = []
    balance = principal

    for month in range(1, tenure_months + 1):
        row_date = None
        if start_date is not None:
            row_date = start_date + relativedelta(months=month - 1)

        interest = balance * monthly_rate

        if month == tenure_months:
            principal_pmt = balance
            schedule.append(
                AmortizationRow(
                    month=month,
                    emi=round(interest + principal_pmt, 2),
                    principal_payment=round(principal_pmt, 2),
                    interest_payment=round(interest, 2),
                    remaining_principal=0.0,
                    payment_date=row_date,
                )
            )
            break

        principal_pmt = exact_emi - interest
        balance -= principal_pmt

        schedule.append(
            AmortizationRow(
                month=month,
                emi=round(exact_emi, 2),
                principal_payment=round(principal_pmt, 2),
                interest_payment=round(interest, 2),
                remaining_principal=round(balance, 2),
                payment_date=row_date,
            )
        )

    return schedule


def calculate_total_interest(schedule: List[AmortizationRow]) -> float:
    """Calculate total interest paid over the schedule."""
    return round(sum(row.interest_payment for row in schedule), 2)


def calculate_total_payment(schedule: List[AmortizationRow]) -> float:
    """Calculate total of all installments over the schedule."""
    return round(sum(row.emi for row in schedule), 2)


def calculate_prepayment_impact(
    principal: float,
    annual_rate: float,
    tenure_months: int,
    prepayment_amount: float,
) -> PrepaymentImpact:
    """
    Calculate the impact of a lump-sum prepayment.

    Two options are evaluated on the reduced principal: keep the EMI and
    shorten the tenure, or keep the tenure and lower the EMI. The reported
    ``interest_saved`` compares total payments under the lower-EMI option
    against the original plan, net of the prepayment itself.

    A prepayment that covers the whole principal clears the loan: both
    reduced figures are zero and ``interest_saved`` is the simple-interest
    estimate ``principal * monthly_rate * tenure - prepayment``.

    Args:
        principal: Outstanding principal
        annual_rate: Annual interest rate in percent
        tenure_months: Remaining tenure in months
        prepayment_amount: Lump sum paid toward principal

    Returns:
        PrepaymentImpact with monetary values rounded to 2 decimals
    """
    original_emi = calculate_emi(principal, annual_rate, tenure_months)
    monthly_rate = monthly_rate_from_annual(annual_rate)
    reduced_principal = principal - prepayment_amount

    if reduced_principal <= 0:
        interest_saved = principal * monthly_rate * tenure_months - prepayment_amount
        return PrepaymentImpact(
            original_emi=original_emi,
            original_tenure=tenure_months,
            reduced_emi=0.0,
            reduced_tenure=0,
            interest_saved=round(interest_saved, 2),
            tenure_saved=tenure_months,
        )

    # Option A: same EMI, shorter tenure
    if monthly_rate == 0:
        reduced_tenure = math.ceil(reduced_principal / original_emi)
    else:
        reduced_tenure = math.ceil(
            math.log(original_emi / (original_emi - reduced_principal * monthly_rate))
            / math.log(1 + monthly_rate)
        )

    # Option B: same tenure, lower EMI
    reduced_emi = calculate_emi(reduced_principal, annual_rate, tenure_months)

    interest_saved = (
        original_emi * tenure_months
        - reduced_emi * tenure_months
        - prepayment_amount
    )

    return PrepaymentImpact(
        original_emi=original_emi,
        original_tenure=tenure_months,
        reduced_emi=reduced_emi,
        reduced_tenure=reduced_tenure,
        interest_saved=round(interest_saved, 2),
        tenure_saved=tenure_months - reduced_tenure,
    )
