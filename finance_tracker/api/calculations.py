"""
Financial calculation API endpoints.

These endpoints accept scalar inputs and return calculated results
without touching stored records.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from finance_tracker.api.schemas import PrepaymentResponse, ScheduleResponse, ScheduleRow
from finance_tracker.calculations import amortization, growth

router = APIRouter()


class LoanTermsInput(BaseModel):
    """Input for EMI and amortization calculations."""

    principal: float = Field(gt=0)
    annual_rate: float = Field(ge=0)
    tenure_months: int = Field(gt=0)


class AmortizationInput(LoanTermsInput):
    """Input for amortization schedule generation."""

    start_date: Optional[date] = None


class EMIResponse(BaseModel):
    emi: float
    total_payment: float
    total_interest: float


@router.post("/emi", response_model=EMIResponse)
async def calculate_emi(inputs: LoanTermsInput):
    """Calculate the monthly installment of a loan."""
    emi = amortization.calculate_emi(
        inputs.principal, inputs.annual_rate, inputs.tenure_months
    )
    total_payment = round(emi * inputs.tenure_months, 2)

    return EMIResponse(
        emi=emi,
        total_payment=total_payment,
        total_interest=round(total_payment - inputs.principal, 2),
    )


@router.post("/amortization", response_model=ScheduleResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    schedule = amortization.generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        tenure_months=inputs.tenure_months,
        start_date=inputs.start_date,
    )

    return ScheduleResponse(
        schedule=[ScheduleRow.model_validate(row) for row in schedule],
        total_interest=amortization.calculate_total_interest(schedule),
        total_payment=amortization.calculate_total_payment(schedule),
    )


class PrepaymentInput(LoanTermsInput):
    """Input for prepayment impact analysis."""

    prepayment_amount: float = Field(gt=0)


@router.post("/prepayment", response_model=PrepaymentResponse)
async def calculate_prepayment(inputs: PrepaymentInput):
    """Compare a shorter tenure and a lower EMI after a lump-sum prepayment."""
    impact = amortization.calculate_prepayment_impact(
        inputs.principal,
        inputs.annual_rate,
        inputs.tenure_months,
        inputs.prepayment_amount,
    )
    return PrepaymentResponse.model_validate(impact)


class InvestmentGrowthInput(BaseModel):
    """Input for investment growth calculation."""

    initial_amount: float = Field(ge=0)
    monthly_contribution: float = Field(default=0.0, ge=0)
    annual_rate: float
    years: float = Field(gt=0)


class InvestmentGrowthResponse(BaseModel):
    final_value: float
    total_invested: float
    total_gain: float


@router.post("/investment-growth", response_model=InvestmentGrowthResponse)
async def calculate_investment_growth(inputs: InvestmentGrowthInput):
    """Calculate the future value of a lump sum plus monthly contributions."""
    final_value = growth.calculate_investment_growth(
        inputs.initial_amount,
        inputs.monthly_contribution,
        inputs.annual_rate,
        inputs.years,
    )
    total_invested = round(
        inputs.initial_amount + inputs.monthly_contribution * inputs.years * 12, 2
    )

    return InvestmentGrowthResponse(
        final_value=final_value,
        total_invested=total_invested,
        total_gain=round(final_value - total_invested, 2),
    )


class WealthProjectionInput(BaseModel):
    """Input for year-by-year wealth projection."""

    initial_net_worth: float
    yearly_savings: float = 0.0
    growth_rate: float
    years: int = Field(ge=0, le=100)


class ProjectionPointResponse(BaseModel):
    year: int
    net_worth: float

    class Config:
        from_attributes = True


class WealthProjectionResponse(BaseModel):
    projection: List[ProjectionPointResponse]


@router.post("/wealth-projection", response_model=WealthProjectionResponse)
async def calculate_wealth_projection(inputs: WealthProjectionInput):
    """Project net worth forward one year at a time."""
    projection = growth.generate_wealth_projection(
        inputs.initial_net_worth,
        inputs.yearly_savings,
        inputs.growth_rate,
        inputs.years,
    )
    return WealthProjectionResponse(
        projection=[ProjectionPointResponse.model_validate(p) for p in projection]
    )


class GoalSavingsInput(BaseModel):
    """Input for goal-based savings calculation."""

    target_amount: float = Field(gt=0)
    current_amount: float = Field(default=0.0, ge=0)
    years_to_goal: float = Field(gt=0)
    annual_rate: float


class GoalSavingsResponse(BaseModel):
    monthly_savings: float
    goal_already_met: bool


@router.post("/goal-savings", response_model=GoalSavingsResponse)
async def calculate_goal_savings(inputs: GoalSavingsInput):
    """Calculate the monthly saving needed to reach a target amount."""
    monthly_savings = growth.calculate_monthly_savings_for_goal(
        inputs.target_amount,
        inputs.current_amount,
        inputs.years_to_goal,
        inputs.annual_rate,
    )
    shortfall = growth.calculate_goal_shortfall(
        inputs.target_amount,
        inputs.current_amount,
        inputs.years_to_goal,
        inputs.annual_rate,
    )
    return GoalSavingsResponse(
        monthly_savings=monthly_savings,
        goal_already_met=shortfall <= 0,
    )
