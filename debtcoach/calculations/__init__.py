"""
Financial Calculation Engine

Core calculation modules for loan cost analysis and debt payoff planning.
Every function is pure: plain values in, fresh immutable results out.
"""

from debtcoach.calculations import (
    amortization,
    analytics,
    comparison,
    debts,
    payoff,
    red_flags,
    remaining_term,
)

__all__ = [
    "amortization",
    "analytics",
    "comparison",
    "debts",
    "payoff",
    "red_flags",
    "remaining_term",
]
