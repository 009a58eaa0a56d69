"""
Repositories over the record store.

One repository per record type, each exposing get-all / get-by-id / add /
update / delete. Deletes are soft: the row is flagged and hidden from
every query.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from finance_tracker.config import get_settings
from finance_tracker.db.models import (
    Asset,
    BankAccount,
    Expense,
    Income,
    Loan,
    UserSettings,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class InsufficientBalanceError(ValueError):
    """Raised when a balance adjustment would leave an account negative."""

    def __init__(self, account_id: str, balance: float, amount: float):
        self.account_id = account_id
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Adjusting balance {balance:.2f} by {amount:.2f} would make "
            f"account {account_id} negative"
        )


class Repository(Generic[ModelT]):
    """CRUD access to one record type."""

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(self.model).filter(self.model.is_deleted == False)

    def get_all(self) -> List[ModelT]:
        return self._query().order_by(self.model.created_at.asc()).all()

    def get_by_id(self, record_id: str) -> Optional[ModelT]:
        return self._query().filter(self.model.id == record_id).first()

    def add(self, data: Dict[str, Any]) -> ModelT:
        record = self.model(**data)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Added %s %s", self.model.__tablename__, record.id)
        return record

    def update(self, record_id: str, data: Dict[str, Any]) -> Optional[ModelT]:
        """Apply the given fields; returns None if the record does not exist."""
        record = self.get_by_id(record_id)
        if record is None:
            return None

        for field, value in data.items():
            setattr(record, field, value)

        self.db.commit()
        self.db.refresh(record)
        logger.info("Updated %s %s (%s)", self.model.__tablename__, record_id, ", ".join(data))
        return record

    def delete(self, record_id: str) -> bool:
        record = self.get_by_id(record_id)
        if record is None:
            return False

        record.is_deleted = True
        self.db.commit()
        logger.info("Deleted %s %s", self.model.__tablename__, record_id)
        return True


class AssetRepository(Repository[Asset]):
    model = Asset


class IncomeRepository(Repository[Income]):
    model = Income


class ExpenseRepository(Repository[Expense]):
    model = Expense


class LoanRepository(Repository[Loan]):
    model = Loan


class BankAccountRepository(Repository[BankAccount]):
    model = BankAccount

    def adjust_balance(self, record_id: str, amount: float) -> Optional[BankAccount]:
        """
        Add ``amount`` (negative for withdrawals) to an account balance.

        Returns None if the account does not exist.

        Raises:
            InsufficientBalanceError: If the new balance would be negative;
                the stored balance is left unchanged.
        """
        account = self.get_by_id(record_id)
        if account is None:
            return None

        new_balance = account.balance + amount
        if new_balance < 0:
            logger.warning(
                "Refused adjustment of %.2f on bank account %s with balance %.2f",
                amount,
                record_id,
                account.balance,
            )
            raise InsufficientBalanceError(record_id, account.balance, amount)

        account.balance = new_balance
        self.db.commit()
        self.db.refresh(account)
        logger.info("Adjusted bank account %s by %.2f", record_id, amount)
        return account


class SettingsRepository:
    """Access to the single settings record, created on first read."""

    def __init__(self, db: Session):
        self.db = db

    def get(self) -> UserSettings:
        record = self.db.query(UserSettings).filter(UserSettings.id == 1).first()
        if record is None:
            defaults = get_settings()
            record = UserSettings(
                id=1,
                default_savings_rate=defaults.default_savings_rate,
                default_inflation_rate=defaults.default_inflation_rate,
                default_investment_return=defaults.default_investment_return,
            )
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
            logger.debug("Created settings record from configured defaults")
        return record

    def update(self, data: Dict[str, Any]) -> UserSettings:
        record = self.get()
        for field, value in data.items():
            setattr(record, field, value)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Updated settings (%s)", ", ".join(data))
        return record
