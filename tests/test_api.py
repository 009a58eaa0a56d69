"""
Tests for record, calculation, dashboard and forecast API endpoints.
"""

import pytest
from datetime import date

from finance_tracker.calculations.forecast import Frequency
from finance_tracker.db.models import (
    Asset,
    AssetCategory,
    BankAccount,
    BankAccountType,
    Expense,
    ExpenseCategory,
    Income,
    IncomeCategory,
    Loan,
    LoanType,
)

# Database setup and the client fixture are handled by conftest.py


@pytest.fixture
def test_bank_account(db_session):
    """Create a test bank account."""
    account = BankAccount(
        name="Test Savings",
        account_number="1234567890",
        account_type=BankAccountType.SAVINGS,
        balance=595000,
        interest_rate=4.0,
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def test_loan(db_session):
    """Create a test home loan."""
    loan = Loan(
        name="House",
        loan_type=LoanType.HOME,
        principal=10000000,
        interest_rate=8.5,
        start_date=date(2025, 8, 16),
        tenure_months=300,
        emi=80522.71,
    )
    db_session.add(loan)
    db_session.commit()
    db_session.refresh(loan)
    return loan


@pytest.fixture
def reference_household(db_session, test_bank_account, test_loan):
    """Bank balances of 55.95 lakh, a salary and a 1 crore home loan."""
    db_session.add_all([
        BankAccount(
            name="Fixed Deposit",
            account_number="FD-001",
            account_type=BankAccountType.FIXED_DEPOSIT,
            balance=5000000,
        ),
        BankAccount(
            name="Joint Account",
            account_number="J-001",
            account_type=BankAccountType.CURRENT,
            balance=750000,
            is_asset=False,
        ),
        Income(
            name="Salary",
            category=IncomeCategory.SALARY,
            amount=145000,
            frequency=Frequency.MONTHLY,
            start_date=date(2025, 9, 5),
        ),
    ])
    db_session.commit()


# ============================================================================
# RECORD API TESTS
# ============================================================================

class TestAssetAPI:
    """Test asset endpoints."""

    def test_create_and_get_asset(self, client):
        response = client.post(
            "/api/assets/",
            json={
                "name": "Gold Coins",
                "category": "GOLD",
                "purchase_date": "2020-01-15",
                "purchase_amount": 200000,
                "current_value": 350000,
                "growth_rate": 8,
            },
        )
        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Gold Coins"
        assert "id" in created

        response = client.get(f"/api/assets/{created['id']}")
        assert response.status_code == 200
        assert response.json()["current_value"] == 350000

    def test_list_assets(self, client, db_session):
        db_session.add(
            Asset(
                name="Flat",
                category=AssetCategory.REAL_ESTATE,
                purchase_date=date(2018, 6, 1),
                purchase_amount=4000000,
                current_value=6000000,
            )
        )
        db_session.commit()

        response = client.get("/api/assets/")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["name"] == "Flat"

    def test_rejects_out_of_range_growth(self, client):
        response = client.post(
            "/api/assets/",
            json={
                "name": "Moonshot",
                "category": "STOCK",
                "purchase_date": "2024-01-01",
                "purchase_amount": 1000,
                "current_value": 1000,
                "growth_rate": 45,
            },
        )
        assert response.status_code == 422

    def test_get_nonexistent_asset(self, client):
        response = client.get("/api/assets/nonexistent-id")
        assert response.status_code == 404

    def test_update_asset(self, client):
        created = client.post(
            "/api/assets/",
            json={
                "name": "Mutual Fund",
                "category": "MUTUAL_FUND",
                "purchase_date": "2022-03-01",
                "purchase_amount": 100000,
                "current_value": 120000,
            },
        ).json()

        response = client.put(f"/api/assets/{created['id']}", json={"current_value": 135000})
        assert response.status_code == 200
        data = response.json()
        assert data["current_value"] == 135000
        assert data["name"] == "Mutual Fund"

        response = client.put(
            f"/api/assets/{created['id']}",
            json={"current_value": None, "growth_rate": None, "notes": None},
        )
        assert response.status_code == 200
        assert response.json()["current_value"] == 135000

    def test_delete_asset(self, client):
        created = client.post(
            "/api/assets/",
            json={
                "name": "Cash",
                "category": "CASH",
                "purchase_date": "2024-01-01",
                "purchase_amount": 5000,
                "current_value": 5000,
            },
        ).json()

        response = client.delete(f"/api/assets/{created['id']}")
        assert response.status_code == 200
        assert response.json()["deleted"] is True

        assert client.get(f"/api/assets/{created['id']}").status_code == 404
        assert client.get("/api/assets/").json()["total"] == 0
        assert client.delete(f"/api/assets/{created['id']}").status_code == 404


class TestIncomeExpenseAPI:
    """Test income and expense endpoints."""

    def test_create_income(self, client, test_bank_account):
        response = client.post(
            "/api/incomes/",
            json={
                "name": "Salary",
                "category": "SALARY",
                "amount": 145000,
                "frequency": "MONTHLY",
                "bank_account_id": test_bank_account.id,
                "start_date": "2025-09-05",
            },
        )
        assert response.status_code == 201
        assert response.json()["bank_account_id"] == test_bank_account.id

    def test_income_end_before_start_rejected(self, client):
        response = client.post(
            "/api/incomes/",
            json={
                "name": "Contract",
                "category": "BUSINESS",
                "amount": 50000,
                "frequency": "MONTHLY",
                "start_date": "2025-09-05",
                "end_date": "2025-01-01",
            },
        )
        assert response.status_code == 422

    def test_expense_update_checks_stored_start(self, client):
        created = client.post(
            "/api/expenses/",
            json={
                "name": "Rent",
                "category": "HOUSING",
                "amount": 25000,
                "frequency": "MONTHLY",
                "start_date": "2025-01-01",
            },
        ).json()

        response = client.put(
            f"/api/expenses/{created['id']}", json={"end_date": "2024-12-01"}
        )
        assert response.status_code == 422

        response = client.put(
            f"/api/expenses/{created['id']}", json={"end_date": "2026-12-01"}
        )
        assert response.status_code == 200
        assert response.json()["end_date"] == "2026-12-01"

    def test_null_leaves_required_fields_unchanged(self, client, test_bank_account):
        created = client.post(
            "/api/incomes/",
            json={
                "name": "Salary",
                "category": "SALARY",
                "amount": 145000,
                "frequency": "MONTHLY",
                "bank_account_id": test_bank_account.id,
                "start_date": "2025-09-05",
                "end_date": "2030-09-05",
            },
        ).json()

        response = client.put(
            f"/api/incomes/{created['id']}",
            json={"start_date": None, "amount": None},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["start_date"] == "2025-09-05"
        assert data["amount"] == 145000

    def test_null_clears_optional_fields(self, client, test_bank_account):
        created = client.post(
            "/api/incomes/",
            json={
                "name": "Salary",
                "category": "SALARY",
                "amount": 145000,
                "frequency": "MONTHLY",
                "bank_account_id": test_bank_account.id,
                "start_date": "2025-09-05",
                "end_date": "2030-09-05",
            },
        ).json()

        response = client.put(
            f"/api/incomes/{created['id']}",
            json={"end_date": None, "bank_account_id": None},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["end_date"] is None
        assert data["bank_account_id"] is None


class TestLoanAPI:
    """Test loan endpoints."""

    def test_create_loan_computes_emi(self, client):
        response = client.post(
            "/api/loans/",
            json={
                "name": "House",
                "loan_type": "HOME",
                "principal": 10000000,
                "interest_rate": 8.5,
                "start_date": "2025-08-16",
                "tenure_months": 300,
            },
        )
        assert response.status_code == 201
        assert response.json()["emi"] == pytest.approx(80522.71, abs=0.01)

    def test_create_loan_keeps_given_emi(self, client):
        response = client.post(
            "/api/loans/",
            json={
                "name": "Car",
                "loan_type": "CAR",
                "principal": 800000,
                "interest_rate": 9,
                "start_date": "2025-01-01",
                "tenure_months": 60,
                "emi": 17000,
            },
        )
        assert response.status_code == 201
        assert response.json()["emi"] == 17000

    def test_update_terms_recalculates_emi(self, client, test_loan):
        response = client.put(f"/api/loans/{test_loan.id}", json={"tenure_months": 240})
        assert response.status_code == 200
        data = response.json()
        assert data["tenure_months"] == 240
        assert data["emi"] > 80522.71

    def test_update_name_keeps_emi(self, client, test_loan):
        response = client.put(f"/api/loans/{test_loan.id}", json={"name": "Home"})
        assert response.status_code == 200
        assert response.json()["emi"] == 80522.71

    def test_null_terms_keep_loan_unchanged(self, client, test_loan):
        response = client.put(
            f"/api/loans/{test_loan.id}", json={"principal": None, "emi": None}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["principal"] == 10000000
        assert data["emi"] == 80522.71

    def test_loan_schedule(self, client, test_loan):
        response = client.get(f"/api/loans/{test_loan.id}/schedule")
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 300
        assert data["schedule"][0]["payment_date"] == "2025-08-16"
        assert data["schedule"][-1]["remaining_principal"] == 0
        assert data["total_interest"] > 0

    def test_loan_prepayment(self, client, test_loan):
        response = client.post(
            f"/api/loans/{test_loan.id}/prepayment", json={"prepayment_amount": 1000000}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["original_tenure"] == 300
        assert data["reduced_emi"] < data["original_emi"]
        assert data["reduced_tenure"] < 300
        assert data["interest_saved"] > 0

    def test_prepayment_unknown_loan(self, client):
        response = client.post(
            "/api/loans/missing/prepayment", json={"prepayment_amount": 1000}
        )
        assert response.status_code == 404


class TestBankAccountAPI:
    """Test bank account endpoints."""

    def test_adjust_balance(self, client, test_bank_account):
        response = client.post(
            f"/api/bank-accounts/{test_bank_account.id}/adjust", json={"amount": -95000}
        )
        assert response.status_code == 200
        assert response.json()["balance"] == 500000

    def test_overdraw_refused(self, client, test_bank_account):
        response = client.post(
            f"/api/bank-accounts/{test_bank_account.id}/adjust", json={"amount": -600000}
        )
        assert response.status_code == 400

        response = client.get(f"/api/bank-accounts/{test_bank_account.id}")
        assert response.json()["balance"] == 595000

    def test_adjust_unknown_account(self, client):
        response = client.post("/api/bank-accounts/missing/adjust", json={"amount": 10})
        assert response.status_code == 404

    def test_projection(self, client, test_bank_account):
        response = client.get(
            f"/api/bank-accounts/{test_bank_account.id}/projection", params={"years": 2}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["current_balance"] == 595000
        assert data["projected_balance"] == pytest.approx(595000 * 1.01 ** 8, abs=0.01)


class TestSettingsAPI:
    """Test settings endpoints."""

    def test_defaults_from_config(self, client):
        response = client.get("/api/settings/")
        assert response.status_code == 200
        data = response.json()
        assert data["default_savings_rate"] == 30
        assert data["default_inflation_rate"] == 7
        assert data["default_investment_return"] == 20
        assert data["currency"] == "INR"

    def test_update_settings(self, client):
        response = client.put("/api/settings/", json={"default_savings_rate": 40})
        assert response.status_code == 200
        assert response.json()["default_savings_rate"] == 40
        assert client.get("/api/settings/").json()["default_inflation_rate"] == 7

    def test_rejects_out_of_range(self, client):
        response = client.put("/api/settings/", json={"default_inflation_rate": 25})
        assert response.status_code == 422


# ============================================================================
# CALCULATION API TESTS
# ============================================================================

class TestCalculationsAPI:
    """Test stateless calculation endpoints."""

    def test_calculate_emi(self, client):
        response = client.post(
            "/api/calculate/emi",
            json={"principal": 120000, "annual_rate": 0, "tenure_months": 12},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["emi"] == 10000
        assert data["total_interest"] == 0

    def test_calculate_amortization(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 100000, "annual_rate": 6, "tenure_months": 60},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 60
        assert data["schedule"][-1]["remaining_principal"] == 0
        assert data["schedule"][0]["payment_date"] is None

    def test_calculate_investment_growth(self, client):
        response = client.post(
            "/api/calculate/investment-growth",
            json={"initial_amount": 5000, "monthly_contribution": 100, "annual_rate": 0, "years": 2},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["final_value"] == 7400
        assert data["total_invested"] == 7400
        assert data["total_gain"] == 0

    def test_calculate_wealth_projection(self, client):
        response = client.post(
            "/api/calculate/wealth-projection",
            json={"initial_net_worth": 100000, "yearly_savings": 10000, "growth_rate": 10, "years": 2},
        )
        assert response.status_code == 200
        projection = response.json()["projection"]
        assert [p["net_worth"] for p in projection] == [100000, 120000, 142000]

    def test_calculate_prepayment_full_clearance(self, client):
        response = client.post(
            "/api/calculate/prepayment",
            json={
                "principal": 100000,
                "annual_rate": 12,
                "tenure_months": 24,
                "prepayment_amount": 150000,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["reduced_emi"] == 0
        assert data["reduced_tenure"] == 0
        assert data["tenure_saved"] == 24

    def test_calculate_goal_savings(self, client):
        response = client.post(
            "/api/calculate/goal-savings",
            json={"target_amount": 12000, "current_amount": 0, "years_to_goal": 1, "annual_rate": 0},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["monthly_savings"] == 1000
        assert data["goal_already_met"] is False

    def test_goal_already_met(self, client):
        response = client.post(
            "/api/calculate/goal-savings",
            json={"target_amount": 1000, "current_amount": 5000, "years_to_goal": 1, "annual_rate": 5},
        )
        assert response.json()["goal_already_met"] is True

    def test_small_shortfall_is_not_met(self, client):
        # Needs well under half a cent a month, which rounds to 0
        response = client.post(
            "/api/calculate/goal-savings",
            json={"target_amount": 1000.01, "current_amount": 1000, "years_to_goal": 100, "annual_rate": 0},
        )
        data = response.json()
        assert data["monthly_savings"] == 0
        assert data["goal_already_met"] is False

    def test_invalid_tenure(self, client):
        response = client.post(
            "/api/calculate/emi",
            json={"principal": 1000, "annual_rate": 5, "tenure_months": 0},
        )
        assert response.status_code == 422


# ============================================================================
# DASHBOARD AND FORECAST TESTS
# ============================================================================

class TestForecastAPI:
    """Test dashboard and forecast endpoints."""

    def test_dashboard(self, client, reference_household, db_session):
        db_session.add(
            Expense(
                name="Insurance",
                category=ExpenseCategory.INSURANCE,
                amount=24000,
                frequency=Frequency.YEARLY,
                start_date=date(2025, 1, 1),
            )
        )
        db_session.commit()

        response = client.get("/api/dashboard")
        assert response.status_code == 200
        data = response.json()
        assert data["bank_accounts_total"] == 5595000
        assert data["total_liabilities"] == 10000000
        assert data["net_worth"] == -4405000
        assert data["monthly_income"] == 145000
        assert data["monthly_expenses"] == 2000
        assert data["monthly_emis"] == 80522.71

    def test_forecast_reference_household(self, client, reference_household):
        response = client.get("/api/forecast", params={"years": 20})
        assert response.status_code == 200
        data = response.json()
        assert data["initial_net_worth"] == -4405000
        assert data["available_income"] == 64477.29
        assert data["monthly_savings"] == 19343.19
        assert data["savings_rate"] == 30
        assert len(data["projection"]) == 21
        assert data["projection"][0]["net_worth"] == -4405000
        assert data["projection"][1]["net_worth"] == pytest.approx(
            -4405000 * 1.2 + data["yearly_savings"], abs=0.1
        )

    def test_forecast_query_overrides_settings(self, client, reference_household):
        data = client.get(
            "/api/forecast", params={"years": 5, "savings_rate": 50, "investment_return": 0}
        ).json()
        assert data["savings_rate"] == 50
        assert data["monthly_savings"] == pytest.approx(64477.29 * 0.5, abs=0.01)
        assert len(data["projection"]) == 6

    def test_forecast_uses_stored_settings(self, client, reference_household):
        client.put("/api/settings/", json={"default_savings_rate": 10})
        data = client.get("/api/forecast").json()
        assert data["savings_rate"] == 10
        assert len(data["projection"]) == 21

    def test_empty_forecast(self, client):
        data = client.get("/api/forecast", params={"years": 3}).json()
        assert data["monthly_savings"] == 0
        assert [p["net_worth"] for p in data["projection"]] == [0, 0, 0, 0]


class TestHealthCheck:
    """Test health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
