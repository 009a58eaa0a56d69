"""
SQLAlchemy ORM models for the finance tracker records.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Text,
    Enum as SQLEnum,
)
from sqlalchemy.orm import declarative_base
import uuid
import enum

from finance_tracker.calculations.forecast import Frequency


class AssetCategory(str, enum.Enum):
    """Asset category enumeration."""
    REAL_ESTATE = "REAL_ESTATE"
    GOLD = "GOLD"
    MUTUAL_FUND = "MUTUAL_FUND"
    STOCK = "STOCK"
    FIXED_DEPOSIT = "FIXED_DEPOSIT"
    PPF = "PPF"
    EPF = "EPF"
    CASH = "CASH"
    OTHER = "OTHER"


class BankAccountType(str, enum.Enum):
    """Bank account type enumeration."""
    SAVINGS = "SAVINGS"
    CURRENT = "CURRENT"
    SALARY = "SALARY"
    FIXED_DEPOSIT = "FIXED_DEPOSIT"
    RECURRING_DEPOSIT = "RECURRING_DEPOSIT"
    NRE = "NRE"
    NRO = "NRO"
    OTHER = "OTHER"


class IncomeCategory(str, enum.Enum):
    """Income category enumeration."""
    SALARY = "SALARY"
    BUSINESS = "BUSINESS"
    RENTAL = "RENTAL"
    INVESTMENT = "INVESTMENT"
    DIVIDEND = "DIVIDEND"
    INTEREST = "INTEREST"
    OTHER = "OTHER"


class ExpenseCategory(str, enum.Enum):
    """Expense category enumeration."""
    HOUSING = "HOUSING"
    TRANSPORTATION = "TRANSPORTATION"
    FOOD = "FOOD"
    UTILITIES = "UTILITIES"
    INSURANCE = "INSURANCE"
    HEALTHCARE = "HEALTHCARE"
    ENTERTAINMENT = "ENTERTAINMENT"
    EDUCATION = "EDUCATION"
    PERSONAL = "PERSONAL"
    DEBT = "DEBT"
    OTHER = "OTHER"


class LoanType(str, enum.Enum):
    """Loan type enumeration."""
    HOME = "HOME"
    CAR = "CAR"
    PERSONAL = "PERSONAL"
    EDUCATION = "EDUCATION"
    CREDIT_CARD = "CREDIT_CARD"
    OTHER = "OTHER"


Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class Asset(AuditMixin, Base):
    """Asset held by the user, valued at its current market value."""

    __tablename__ = "assets"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    category = Column(SQLEnum(AssetCategory), default=AssetCategory.OTHER, nullable=False)

    purchase_date = Column(Date, nullable=False)
    purchase_amount = Column(Float, nullable=False)
    current_value = Column(Float, nullable=False)
    growth_rate = Column(Float, default=0.0)  # Annual, in percent

    notes = Column(Text)


class BankAccount(AuditMixin, Base):
    """Bank account; counts toward net worth when ``is_asset`` is set."""

    __tablename__ = "bank_accounts"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    account_number = Column(String(64), nullable=False)
    account_type = Column(
        SQLEnum(BankAccountType), default=BankAccountType.SAVINGS, nullable=False
    )

    balance = Column(Float, default=0.0, nullable=False)
    interest_rate = Column(Float, default=0.0)  # Annual, in percent
    is_asset = Column(Boolean, default=True, nullable=False)

    notes = Column(Text)


class Income(AuditMixin, Base):
    """Recurring or one-time income entry."""

    __tablename__ = "incomes"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    category = Column(SQLEnum(IncomeCategory), default=IncomeCategory.OTHER, nullable=False)

    amount = Column(Float, nullable=False)
    frequency = Column(SQLEnum(Frequency), default=Frequency.MONTHLY, nullable=False)
    bank_account_id = Column(String, ForeignKey("bank_accounts.id"), nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    notes = Column(Text)


class Expense(AuditMixin, Base):
    """Recurring or one-time expense entry."""

    __tablename__ = "expenses"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    category = Column(SQLEnum(ExpenseCategory), default=ExpenseCategory.OTHER, nullable=False)

    amount = Column(Float, nullable=False)
    frequency = Column(SQLEnum(Frequency), default=Frequency.MONTHLY, nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    notes = Column(Text)


class Loan(AuditMixin, Base):
    """Amortizing loan; counts as a liability at its full principal."""

    __tablename__ = "loans"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    loan_type = Column(SQLEnum(LoanType), default=LoanType.OTHER, nullable=False)

    principal = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)  # Annual, in percent
    start_date = Column(Date, nullable=False)
    tenure_months = Column(Integer, nullable=False)
    emi = Column(Float, nullable=False)

    notes = Column(Text)


class UserSettings(AuditMixin, Base):
    """Forecast assumption defaults. A single row is kept."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, default=1)
    default_savings_rate = Column(Float, nullable=False)
    default_inflation_rate = Column(Float, nullable=False)
    default_investment_return = Column(Float, nullable=False)
    currency = Column(String(3), default="INR", nullable=False)
