"""
Request and response schemas for the record endpoints.

Field ranges follow what the record forms accept; the calculation engine
itself trusts its inputs.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from finance_tracker.calculations.forecast import Frequency
from finance_tracker.db.models import (
    AssetCategory,
    BankAccountType,
    ExpenseCategory,
    IncomeCategory,
    LoanType,
)


class RecordResponse(BaseModel):
    """Fields shared by every stored record."""

    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# ASSETS
# ============================================================================

class AssetCreate(BaseModel):
    """Schema for creating an asset."""

    name: str = Field(min_length=1)
    category: AssetCategory
    purchase_date: date
    purchase_amount: float = Field(gt=0)
    current_value: float = Field(gt=0)
    growth_rate: float = Field(default=0.0, ge=-10, le=30)
    notes: Optional[str] = None


class AssetUpdate(BaseModel):
    """Schema for updating an asset."""

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[AssetCategory] = None
    purchase_date: Optional[date] = None
    purchase_amount: Optional[float] = Field(default=None, gt=0)
    current_value: Optional[float] = Field(default=None, gt=0)
    growth_rate: Optional[float] = Field(default=None, ge=-10, le=30)
    notes: Optional[str] = None


class AssetResponse(RecordResponse):
    name: str
    category: AssetCategory
    purchase_date: date
    purchase_amount: float
    current_value: float
    growth_rate: Optional[float]
    notes: Optional[str]


# ============================================================================
# BANK ACCOUNTS
# ============================================================================

class BankAccountCreate(BaseModel):
    """Schema for creating a bank account."""

    name: str = Field(min_length=1)
    account_number: str = Field(min_length=1)
    account_type: BankAccountType
    balance: float = 0.0
    interest_rate: float = Field(default=0.0, ge=0, le=15)
    is_asset: bool = True
    notes: Optional[str] = None


class BankAccountUpdate(BaseModel):
    """Schema for updating a bank account."""

    name: Optional[str] = Field(default=None, min_length=1)
    account_number: Optional[str] = Field(default=None, min_length=1)
    account_type: Optional[BankAccountType] = None
    balance: Optional[float] = None
    interest_rate: Optional[float] = Field(default=None, ge=0, le=15)
    is_asset: Optional[bool] = None
    notes: Optional[str] = None


class BankAccountResponse(RecordResponse):
    name: str
    account_number: str
    account_type: BankAccountType
    balance: float
    interest_rate: Optional[float]
    is_asset: bool
    notes: Optional[str]


class BalanceAdjustment(BaseModel):
    """Amount to add to a balance; negative for withdrawals."""

    amount: float


class BankAccountProjection(BaseModel):
    account_id: str
    years: float
    current_balance: float
    projected_balance: float


# ============================================================================
# INCOMES AND EXPENSES
# ============================================================================

class _DatedEntry(BaseModel):
    @model_validator(mode="after")
    def check_end_after_start(self):
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class IncomeCreate(_DatedEntry):
    """Schema for creating an income entry."""

    name: str = Field(min_length=1)
    category: IncomeCategory
    amount: float = Field(gt=0)
    frequency: Frequency
    bank_account_id: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None


class IncomeUpdate(_DatedEntry):
    """Schema for updating an income entry."""

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[IncomeCategory] = None
    amount: Optional[float] = Field(default=None, gt=0)
    frequency: Optional[Frequency] = None
    bank_account_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class IncomeResponse(RecordResponse):
    name: str
    category: IncomeCategory
    amount: float
    frequency: Frequency
    bank_account_id: Optional[str]
    start_date: date
    end_date: Optional[date]
    notes: Optional[str]


class ExpenseCreate(_DatedEntry):
    """Schema for creating an expense entry."""

    name: str = Field(min_length=1)
    category: ExpenseCategory
    amount: float = Field(gt=0)
    frequency: Frequency
    start_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None


class ExpenseUpdate(_DatedEntry):
    """Schema for updating an expense entry."""

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ExpenseCategory] = None
    amount: Optional[float] = Field(default=None, gt=0)
    frequency: Optional[Frequency] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class ExpenseResponse(RecordResponse):
    name: str
    category: ExpenseCategory
    amount: float
    frequency: Frequency
    start_date: date
    end_date: Optional[date]
    notes: Optional[str]


# ============================================================================
# LOANS
# ============================================================================

class LoanCreate(BaseModel):
    """Schema for creating a loan. EMI is calculated when omitted."""

    name: str = Field(min_length=1)
    loan_type: LoanType
    principal: float = Field(gt=0)
    interest_rate: float = Field(ge=0, le=40)
    start_date: date
    tenure_months: int = Field(gt=0)
    emi: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None


class LoanUpdate(BaseModel):
    """Schema for updating a loan."""

    name: Optional[str] = Field(default=None, min_length=1)
    loan_type: Optional[LoanType] = None
    principal: Optional[float] = Field(default=None, gt=0)
    interest_rate: Optional[float] = Field(default=None, ge=0, le=40)
    start_date: Optional[date] = None
    tenure_months: Optional[int] = Field(default=None, gt=0)
    emi: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None


class LoanResponse(RecordResponse):
    name: str
    loan_type: LoanType
    principal: float
    interest_rate: float
    start_date: date
    tenure_months: int
    emi: float
    notes: Optional[str]


class ScheduleRow(BaseModel):
    month: int
    payment_date: Optional[date] = None
    emi: float
    principal_payment: float
    interest_payment: float
    remaining_principal: float

    class Config:
        from_attributes = True


class ScheduleResponse(BaseModel):
    schedule: List[ScheduleRow]
    total_interest: float
    total_payment: float


class PrepaymentRequest(BaseModel):
    prepayment_amount: float = Field(gt=0)


class PrepaymentResponse(BaseModel):
    original_emi: float
    original_tenure: int
    reduced_emi: float
    reduced_tenure: int
    interest_saved: float
    tenure_saved: int

    class Config:
        from_attributes = True


# ============================================================================
# SETTINGS
# ============================================================================

class SettingsResponse(BaseModel):
    default_savings_rate: float
    default_inflation_rate: float
    default_investment_return: float
    currency: str

    class Config:
        from_attributes = True


class SettingsUpdate(BaseModel):
    default_savings_rate: Optional[float] = Field(default=None, ge=0, le=100)
    default_inflation_rate: Optional[float] = Field(default=None, ge=0, le=20)
    default_investment_return: Optional[float] = Field(default=None, ge=-10, le=30)
    currency: Optional[str] = Field(default=None, pattern="^INR$")
