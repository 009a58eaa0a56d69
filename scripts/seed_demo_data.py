"""
Seed the database with a demo household.

One salary, two bank accounts and a home loan: net worth starts negative
and turns positive over the forecast horizon.
"""
import sys
import os
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from finance_tracker.calculations.amortization import calculate_emi
from finance_tracker.calculations.forecast import Frequency
from finance_tracker.db.database import get_db_context, init_db
from finance_tracker.db.models import (
    BankAccount,
    BankAccountType,
    Income,
    IncomeCategory,
    Loan,
    LoanType,
)


def main():
    init_db()

    with get_db_context() as db:
        existing = db.query(Loan).filter(Loan.name == "House").first()
        if existing:
            print(f"Demo data already present (loan ID: {existing.id})")
            return

        salary_account = BankAccount(
            name="HDFC Salary",
            account_number="50100012345678",
            account_type=BankAccountType.SALARY,
            balance=595000,
            interest_rate=3.5,
        )
        savings_account = BankAccount(
            name="SBI Savings",
            account_number="30012345678",
            account_type=BankAccountType.SAVINGS,
            balance=5000000,
            interest_rate=2.7,
        )
        db.add_all([salary_account, savings_account])
        db.flush()
        print(f"Created bank accounts: {salary_account.name}, {savings_account.name}")

        salary = Income(
            name="Salary",
            category=IncomeCategory.SALARY,
            amount=145000,
            frequency=Frequency.MONTHLY,
            bank_account_id=salary_account.id,
            start_date=date(2025, 9, 5),
        )
        db.add(salary)

        emi = calculate_emi(10000000, 8.5, 300)
        loan = Loan(
            name="House",
            loan_type=LoanType.HOME,
            principal=10000000,
            interest_rate=8.5,
            start_date=date(2025, 8, 16),
            tenure_months=300,
            emi=emi,
        )
        db.add(loan)
        db.flush()
        print(f"Created loan: {loan.name} (EMI: {emi:,.2f})")

    print("\nDemo data seeded.")


if __name__ == "__main__":
    main()
