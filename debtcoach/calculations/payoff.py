"""
Multi-Debt Payoff Simulation

Simulates month-by-month repayment of a set of debts under a snowball or
avalanche strategy:

1. Minimum payments - every open debt accrues a month of interest and
   receives its minimum payment
2. Extra payment - the extra amount goes to the first open debt in
   strategy order, capped at that debt's remaining balance
3. Snapshot - balances and totals for the month are recorded

The run stops when every balance reaches zero or the month cap is hit.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from debtcoach.calculations.debts import Debt
from debtcoach.calculations.remaining_term import Months, estimate_remaining_months

logger = logging.getLogger(__name__)

MAX_PAYOFF_MONTHS = 600  # 50 years

SNOWBALL = "snowball"
AVALANCHE = "avalanche"
STRATEGY_TYPES = (SNOWBALL, AVALANCHE)


@dataclass(frozen=True)
class PayoffStrategy:
    """How to prioritize debts and how much to pay above minimums."""

    type: str = AVALANCHE
    extra_payment: float = 0.0
    # Lowers the month cap when set; values above MAX_PAYOFF_MONTHS are clamped
    # rather than extending the run past 50 years
    target_months: Optional[int] = None


@dataclass(frozen=True)
class DebtSnapshot:
    """State of one debt at the end of a simulated month."""

    id: str
    name: str
    balance: float
    payment: float  # Scheduled minimum while a balance remains, else 0
    remaining_months: Months  # Standalone estimate at the minimum payment


@dataclass(frozen=True)
class PayoffTimelineEntry:
    """Totals for one simulated month."""

    month: int
    debts: Tuple[DebtSnapshot, ...]
    total_balance: float
    total_payment: float
    interest_paid: float
    principal_paid: float


@dataclass(frozen=True)
class PayoffSummary:
    """Headline figures for a completed simulation."""

    months: int
    total_interest: float
    total_paid: float
    final_balance: float
    capped: bool


def order_debts(debts: List[Debt], strategy_type: str) -> List[Debt]:
    """
    Order debts by payoff priority.

    Snowball: smallest balance first. Avalanche: highest APR first.
    Ties keep their input order.

    Raises:
        ValueError: If the strategy type is unknown
    """
    if strategy_type == SNOWBALL:
        return sorted(debts, key=lambda d: d.balance)
    if strategy_type == AVALANCHE:
        return sorted(debts, key=lambda d: -d.apr)
    raise ValueError(f"Invalid debt payoff strategy: {strategy_type!r}")


def resolve_month_cap(strategy: PayoffStrategy) -> int:
    """Month cap for a run: the strategy's target, never above MAX_PAYOFF_MONTHS."""
    if strategy.target_months is None or strategy.target_months <= 0:
        return MAX_PAYOFF_MONTHS
    return min(strategy.target_months, MAX_PAYOFF_MONTHS)


def simulate_payoff(
    debts: List[Debt], strategy: PayoffStrategy
) -> List[PayoffTimelineEntry]:
    """
    Simulate paying off a set of debts.

    The caller's debts are never modified; balances are tracked in a private
    working list and each month is recorded as an immutable snapshot.

    Args:
        debts: Debts to pay off
        strategy: Ordering rule, extra payment, and optional month cap

    Returns:
        One timeline entry per simulated month (empty if there are no debts)
    """
    ordered = order_debts(list(debts), strategy.type)
    if not ordered:
        return []

    max_months = resolve_month_cap(strategy)
    balances = [debt.balance for debt in ordered]
    timeline = []
    month = 0

    while any(balance > 0 for balance in balances) and month < max_months:
        month += 1

        total_payment = 0.0
        interest_paid = 0.0
        principal_paid = 0.0

        # Pay minimums first
        for i, debt in enumerate(ordered):
            if balances[i] <= 0:
                continue

            monthly_interest = balances[i] * debt.apr / 100 / 12
            principal_pmt = min(debt.minimum_payment - monthly_interest, balances[i])

            balances[i] -= principal_pmt
            total_payment += debt.minimum_payment
            interest_paid += monthly_interest
            principal_paid += principal_pmt

        # Apply extra payment to the target debt
        if strategy.extra_payment > 0:
            target = next((i for i, balance in enumerate(balances) if balance > 0), None)
            if target is not None:
                extra_applied = min(strategy.extra_payment, balances[target])
                balances[target] -= extra_applied
                total_payment += extra_applied
                principal_paid += extra_applied

        snapshots = tuple(
            DebtSnapshot(
                id=debt.id,
                name=debt.name,
                balance=balances[i],
                payment=debt.minimum_payment if balances[i] > 0 else 0.0,
                remaining_months=estimate_remaining_months(
                    balances[i], debt.minimum_payment, debt.apr
                ),
            )
            for i, debt in enumerate(ordered)
        )

        timeline.append(
            PayoffTimelineEntry(
                month=month,
                debts=snapshots,
                total_balance=sum(balances),
                total_payment=total_payment,
                interest_paid=interest_paid,
                principal_paid=principal_paid,
            )
        )

    remaining = sum(balance for balance in balances if balance > 0)
    if remaining > 0:
        logger.warning(
            f"Payoff simulation capped at {max_months} months with "
            f"{remaining:,.2f} still outstanding"
        )
    else:
        logger.debug(f"Payoff simulation converged after {month} months")

    return timeline


def summarize_payoff(timeline: List[PayoffTimelineEntry]) -> PayoffSummary:
    """Summarize a payoff timeline."""
    if not timeline:
        return PayoffSummary(
            months=0, total_interest=0.0, total_paid=0.0, final_balance=0.0, capped=False
        )

    final_balance = timeline[-1].total_balance
    return PayoffSummary(
        months=len(timeline),
        total_interest=sum(entry.interest_paid for entry in timeline),
        total_paid=sum(entry.total_payment for entry in timeline),
        final_balance=final_balance,
        capped=final_balance > 0,
    )
