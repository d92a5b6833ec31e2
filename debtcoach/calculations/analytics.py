"""
Portfolio Analytics

Aggregate figures for a set of debts or loan offers, computed directly from
the inputs without running a payoff simulation.
"""

from typing import List, Dict, Optional
from datetime import date, timedelta
from dataclasses import dataclass
from dateutil.relativedelta import relativedelta

from debtcoach.calculations.amortization import LoanTerms, compute_amortization
from debtcoach.calculations.debts import Debt, DebtType
from debtcoach.calculations.remaining_term import (
    Months,
    estimate_remaining_months,
    is_infinite,
)

DEFAULT_HORIZON_DAYS = 30


@dataclass(frozen=True)
class UpcomingPayment:
    """A minimum payment falling due inside the reporting horizon."""

    debt_id: str
    name: str
    amount: float
    due_date: date


@dataclass(frozen=True)
class PortfolioAnalytics:
    """Summary figures for a set of debts."""

    total_debt: float
    monthly_minimums: float
    weighted_average_apr: float
    # Slowest single debt at its own minimum payment, not a joint simulation
    worst_case_payoff_months: Months
    total_interest_with_minimums: float
    debts_by_type: Dict[str, Dict[str, float]]
    upcoming_payments: List[UpcomingPayment]


@dataclass(frozen=True)
class LoanAnalytics:
    """Summary figures for a set of loan offers."""

    total_loan_value: float
    average_apr: float
    total_monthly_payments: float
    loans_by_type: Dict[str, Dict[str, float]]
    potential_red_flags: int
    recommendations: List[str]


def next_payment_date(due_date: date, as_of: date) -> date:
    """
    Roll a monthly due date forward to its next occurrence after as_of.

    Months are added to the original date, so a 31st due date lands on the
    last day of shorter months without drifting earlier.
    """
    if due_date > as_of:
        return due_date

    months = (as_of.year - due_date.year) * 12 + (as_of.month - due_date.month)
    candidate = due_date + relativedelta(months=months)
    while candidate <= as_of:
        months += 1
        candidate = due_date + relativedelta(months=months)

    return candidate


def calculate_weighted_apr(debts: List[Debt]) -> float:
    """Balance-weighted average APR (0 when there is no balance)."""
    total = sum(debt.balance for debt in debts)
    if total == 0:
        return 0.0
    return sum(debt.apr * debt.balance for debt in debts) / total


def calculate_worst_case_months(debts: List[Debt]) -> Months:
    """Longest standalone payoff estimate across debts at minimum payments."""
    worst: Months = 0
    for debt in debts:
        months = estimate_remaining_months(debt.balance, debt.minimum_payment, debt.apr)
        worst = max(worst, months)
    return worst


def calculate_interest_with_minimums(debts: List[Debt]) -> float:
    """
    Approximate total interest if every debt is paid at its minimum.

    Debts whose minimum never covers interest are left out.
    """
    total = 0.0
    for debt in debts:
        months = estimate_remaining_months(debt.balance, debt.minimum_payment, debt.apr)
        if is_infinite(months):
            continue
        total += max(0.0, debt.minimum_payment * months - debt.balance)
    return total


def group_debts_by_type(debts: List[Debt]) -> Dict[str, Dict[str, float]]:
    """Count and total balance per debt type."""
    groups: Dict[str, Dict[str, float]] = {}
    for debt in debts:
        key = DebtType(debt.debt_type).value
        bucket = groups.setdefault(key, {"count": 0, "total_balance": 0.0})
        bucket["count"] += 1
        bucket["total_balance"] += debt.balance
    return groups


def find_upcoming_payments(
    debts: List[Debt], as_of: date, horizon_days: int = DEFAULT_HORIZON_DAYS
) -> List[UpcomingPayment]:
    """Minimum payments due within horizon_days of as_of, soonest first."""
    cutoff = as_of + timedelta(days=horizon_days)
    upcoming = []

    for debt in debts:
        if debt.due_date is None:
            continue
        due = next_payment_date(debt.due_date, as_of)
        if due <= cutoff:
            upcoming.append(
                UpcomingPayment(
                    debt_id=debt.id,
                    name=debt.name,
                    amount=debt.minimum_payment,
                    due_date=due,
                )
            )

    return sorted(upcoming, key=lambda payment: payment.due_date)


def aggregate_analytics(
    debts: List[Debt],
    as_of: Optional[date] = None,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> PortfolioAnalytics:
    """
    Compute portfolio analytics for a set of debts.

    Args:
        debts: Current debts
        as_of: Reference date for upcoming payments (defaults to today)
        horizon_days: How far ahead to look for due payments

    Returns:
        PortfolioAnalytics for the debt set
    """
    if as_of is None:
        as_of = date.today()

    return PortfolioAnalytics(
        total_debt=sum(debt.balance for debt in debts),
        monthly_minimums=sum(debt.minimum_payment for debt in debts),
        weighted_average_apr=calculate_weighted_apr(debts),
        worst_case_payoff_months=calculate_worst_case_months(debts),
        total_interest_with_minimums=calculate_interest_with_minimums(debts),
        debts_by_type=group_debts_by_type(debts),
        upcoming_payments=find_upcoming_payments(debts, as_of, horizon_days),
    )


def generate_recommendations(loans: List[LoanTerms]) -> List[str]:
    """Plain-language advice for a set of loan offers."""
    recommendations = []

    if not loans:
        recommendations.append("Add loan options to compare and find the best deal")
        return recommendations

    if any(loan.apr > 15 for loan in loans):
        recommendations.append(
            "Consider shopping around for better rates - some of your loans have high APRs"
        )

    if any(loan.fees > loan.principal * 0.03 for loan in loans):
        recommendations.append(
            "Look for lenders with lower fees to reduce your total borrowing cost"
        )

    if any(loan.term_months > 60 for loan in loans):
        recommendations.append(
            "Consider shorter loan terms to pay less interest over time"
        )

    if len(loans) >= 2:
        recommendations.append("Compare the total cost, not just monthly payments")
        recommendations.append(
            "Check if lenders offer rate discounts for autopay or existing customers"
        )

    aprs = [loan.apr for loan in loans]
    if max(aprs) - min(aprs) > 5:
        recommendations.append(
            "There's a significant difference in APRs - choose the lowest rate to save money"
        )

    return recommendations


def aggregate_loan_analytics(loans: List[LoanTerms]) -> LoanAnalytics:
    """Compute analytics and recommendations for a set of loan offers."""
    total_monthly_payments = 0.0
    potential_red_flags = 0
    loans_by_type: Dict[str, Dict[str, float]] = {}

    for loan in loans:
        calculations = compute_amortization(loan)
        total_monthly_payments += calculations.monthly_payment
        potential_red_flags += len(calculations.red_flags)

        bucket = loans_by_type.setdefault(loan.loan_type, {"count": 0, "total_value": 0.0})
        bucket["count"] += 1
        bucket["total_value"] += loan.principal

    average_apr = sum(loan.apr for loan in loans) / len(loans) if loans else 0.0

    return LoanAnalytics(
        total_loan_value=sum(loan.principal for loan in loans),
        average_apr=average_apr,
        total_monthly_payments=total_monthly_payments,
        loans_by_type=loans_by_type,
        potential_red_flags=potential_red_flags,
        recommendations=generate_recommendations(loans),
    )
