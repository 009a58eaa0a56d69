"""
Loan endpoints: CRUD plus schedule and prepayment analysis of stored loans.
"""

from typing import Any, Dict

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from finance_tracker.api import schemas
from finance_tracker.api.records import build_record_router
from finance_tracker.calculations.amortization import (
    calculate_emi,
    calculate_prepayment_impact,
    calculate_total_interest,
    calculate_total_payment,
    generate_amortization_schedule,
)
from finance_tracker.db.database import get_db
from finance_tracker.db.models import Loan
from finance_tracker.db.repositories import LoanRepository


def fill_loan_emi(values: Dict[str, Any]) -> Dict[str, Any]:
    """Calculate the EMI of a new loan when the caller leaves it out."""
    if values.get("emi") is None:
        values["emi"] = calculate_emi(
            values["principal"], values["interest_rate"], values["tenure_months"]
        )
    return values


def refresh_loan_emi(record: Loan, values: Dict[str, Any]) -> Dict[str, Any]:
    """Recalculate the EMI when loan terms change without an explicit EMI."""
    terms = ("principal", "interest_rate", "tenure_months")
    if "emi" not in values and any(t in values for t in terms):
        values["emi"] = calculate_emi(
            values.get("principal", record.principal),
            values.get("interest_rate", record.interest_rate),
            values.get("tenure_months", record.tenure_months),
        )
    return values


router = build_record_router(
    LoanRepository,
    schemas.LoanCreate,
    schemas.LoanUpdate,
    schemas.LoanResponse,
    label="Loan",
    prepare_create=fill_loan_emi,
    prepare_update=refresh_loan_emi,
)


def get_loan(loan_id: str, db: Session = Depends(get_db)) -> Loan:
    loan = LoanRepository(db).get_by_id(loan_id)
    if not loan:
        raise HTTPException(status_code=404, detail="Loan not found")
    return loan


@router.get("/{loan_id}/schedule", response_model=schemas.ScheduleResponse)
async def loan_schedule(loan: Loan = Depends(get_loan)):
    """Amortization schedule of a stored loan, dated from its start date."""
    schedule = generate_amortization_schedule(
        loan.principal, loan.interest_rate, loan.tenure_months, start_date=loan.start_date
    )
    return schemas.ScheduleResponse(
        schedule=[schemas.ScheduleRow.model_validate(row) for row in schedule],
        total_interest=calculate_total_interest(schedule),
        total_payment=calculate_total_payment(schedule),
    )


@router.post("/{loan_id}/prepayment", response_model=schemas.PrepaymentResponse)
async def loan_prepayment(
    request: schemas.PrepaymentRequest,
    loan: Loan = Depends(get_loan),
):
    """Impact of a lump-sum prepayment against a stored loan's full tenure."""
    impact = calculate_prepayment_impact(
        loan.principal, loan.interest_rate, loan.tenure_months, request.prepayment_amount
    )
    return schemas.PrepaymentResponse.model_validate(impact)
