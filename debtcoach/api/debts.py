"""
Debt payoff API endpoints.
"""

import logging
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from debtcoach.api.errors import months_or_none, raise_validation_error
from debtcoach.calculations.analytics import aggregate_analytics
from debtcoach.calculations.debts import Debt, classify_debt_type, validate_debts
from debtcoach.calculations.payoff import (
    PayoffStrategy,
    simulate_payoff,
    summarize_payoff,
)
from debtcoach.calculations.remaining_term import (
    estimate_remaining_months,
    validate_estimate_inputs,
)
from debtcoach.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()


class DebtInput(BaseModel):
    """Debt input schema."""

    id: str
    name: str
    balance: float
    apr: float
    minimum_payment: float
    debt_type: Optional[str] = None  # Free-form label, e.g. "Credit Card"
    due_date: Optional[date] = None

    def to_debt(self) -> Debt:
        return Debt(
            id=self.id,
            name=self.name,
            balance=self.balance,
            apr=self.apr,
            minimum_payment=self.minimum_payment,
            debt_type=classify_debt_type(self.debt_type),
            due_date=self.due_date,
        )


class StrategyInput(BaseModel):
    """Payoff strategy input schema."""

    type: Literal["snowball", "avalanche"] = "avalanche"
    extra_payment: float = Field(default=0.0, ge=0)
    target_months: Optional[int] = Field(default=None, ge=1)


class PayoffInput(BaseModel):
    """Input for payoff simulation."""

    debts: List[DebtInput]
    strategy: StrategyInput = StrategyInput()


class AnalyticsInput(BaseModel):
    """Input for portfolio analytics."""

    debts: List[DebtInput]
    as_of: Optional[date] = None
    horizon_days: Optional[int] = Field(default=None, ge=0)


class RemainingMonthsInput(BaseModel):
    """Input for a single-debt payoff estimate."""

    balance: float
    payment: float
    apr: float


def _validated_debts(debts: List[DebtInput]) -> List[Debt]:
    """Convert and validate debts, rejecting the request on any error."""
    if len(debts) > settings.max_debts_per_request:
        raise_validation_error(
            "Invalid debt data",
            [f"Cannot process more than {settings.max_debts_per_request} debts"],
        )

    converted = [debt.to_debt() for debt in debts]
    errors = validate_debts(converted)
    if errors:
        raise_validation_error("Invalid debt data", errors)
    return converted


@router.post("/payoff")
async def calculate_payoff(inputs: PayoffInput):
    """Simulate paying off debts with a snowball or avalanche strategy."""
    debts = _validated_debts(inputs.debts)
    strategy = PayoffStrategy(
        type=inputs.strategy.type,
        extra_payment=inputs.strategy.extra_payment,
        target_months=inputs.strategy.target_months,
    )

    timeline = simulate_payoff(debts, strategy)
    summary = summarize_payoff(timeline)
    logger.info(
        f"Simulated {strategy.type} payoff for {len(debts)} debts: "
        f"{summary.months} months"
    )

    return {
        "strategy": strategy.type,
        "summary": {
            "months": summary.months,
            "total_interest": summary.total_interest,
            "total_paid": summary.total_paid,
            "final_balance": summary.final_balance,
            "capped": summary.capped,
        },
        "timeline": [
            {
                "month": entry.month,
                "debts": [
                    {
                        "id": snapshot.id,
                        "name": snapshot.name,
                        "balance": snapshot.balance,
                        "payment": snapshot.payment,
                        "remaining_months": months_or_none(snapshot.remaining_months),
                    }
                    for snapshot in entry.debts
                ],
                "total_balance": entry.total_balance,
                "total_payment": entry.total_payment,
                "interest_paid": entry.interest_paid,
                "principal_paid": entry.principal_paid,
            }
            for entry in timeline
        ],
    }


@router.post("/analytics")
async def debt_analytics(inputs: AnalyticsInput):
    """Summarize the current debt portfolio."""
    debts = _validated_debts(inputs.debts)
    horizon_days = (
        inputs.horizon_days
        if inputs.horizon_days is not None
        else settings.upcoming_payment_days
    )

    analytics = aggregate_analytics(debts, as_of=inputs.as_of, horizon_days=horizon_days)

    return {
        "total_debt": analytics.total_debt,
        "monthly_minimums": analytics.monthly_minimums,
        "weighted_average_apr": analytics.weighted_average_apr,
        "worst_case_payoff_months": months_or_none(analytics.worst_case_payoff_months),
        "total_interest_with_minimums": analytics.total_interest_with_minimums,
        "debts_by_type": analytics.debts_by_type,
        "upcoming_payments": [
            {
                "debt_id": payment.debt_id,
                "name": payment.name,
                "amount": payment.amount,
                "due_date": payment.due_date.isoformat(),
            }
            for payment in analytics.upcoming_payments
        ],
    }


@router.post("/remaining-months")
async def remaining_months(inputs: RemainingMonthsInput):
    """Estimate months to pay off one balance at a fixed payment."""
    errors = validate_estimate_inputs(inputs.balance, inputs.payment, inputs.apr)
    if errors:
        raise_validation_error("Invalid debt data", errors)

    months = months_or_none(
        estimate_remaining_months(inputs.balance, inputs.payment, inputs.apr)
    )
    return {"months": months, "is_infinite": months is None}
