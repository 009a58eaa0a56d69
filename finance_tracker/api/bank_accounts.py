"""
Bank account endpoints: CRUD, balance adjustments and growth projection.
"""

from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from finance_tracker.api import schemas
from finance_tracker.api.records import build_record_router
from finance_tracker.calculations.growth import calculate_compound_growth
from finance_tracker.db.database import get_db
from finance_tracker.db.repositories import BankAccountRepository, InsufficientBalanceError

router = build_record_router(
    BankAccountRepository,
    schemas.BankAccountCreate,
    schemas.BankAccountUpdate,
    schemas.BankAccountResponse,
    label="Bank account",
)


@router.post("/{account_id}/adjust", response_model=schemas.BankAccountResponse)
async def adjust_balance(
    account_id: str,
    adjustment: schemas.BalanceAdjustment,
    db: Session = Depends(get_db),
):
    """Add to or withdraw from a balance. Overdrawing is refused."""
    try:
        account = BankAccountRepository(db).adjust_balance(account_id, adjustment.amount)
    except InsufficientBalanceError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not account:
        raise HTTPException(status_code=404, detail="Bank account not found")
    return account


@router.get("/{account_id}/projection", response_model=schemas.BankAccountProjection)
async def project_balance(
    account_id: str,
    years: float = Query(default=1, ge=0),
    db: Session = Depends(get_db),
):
    """Project a balance forward at the account's rate, compounded quarterly."""
    account = BankAccountRepository(db).get_by_id(account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Bank account not found")

    return schemas.BankAccountProjection(
        account_id=account.id,
        years=years,
        current_balance=account.balance,
        projected_balance=calculate_compound_growth(
            account.balance, account.interest_rate or 0.0, years
        ),
    )
