"""
Remaining Term Estimation

Closed-form estimate of how many months a single balance takes to reach zero
at a fixed monthly payment. Returns ``math.inf`` when the payment never
retires the balance.
"""

import math
from typing import List, Union

INFINITE_MONTHS = math.inf

Months = Union[int, float]


def estimate_remaining_months(balance: float, payment: float, apr: float) -> Months:
    """
    Estimate months to pay off a balance at a fixed payment.

    Solves the annuity equation for n:
        n = -ln(1 - B*r/P) / ln(1 + r)

    Args:
        balance: Current balance
        payment: Fixed monthly payment
        apr: Annual percentage rate (e.g., 18.0 for 18%)

    Returns:
        Whole months (rounded up), or INFINITE_MONTHS if the payment does not
        cover the monthly interest
    """
    if balance <= 0:
        return 0
    if payment <= 0:
        return INFINITE_MONTHS

    rate = apr / 100 / 12
    if rate == 0:
        return math.ceil(balance / payment)

    # Payment must exceed interest for the log argument to stay positive
    if balance * rate >= payment:
        return INFINITE_MONTHS

    months = -math.log(1 - balance * rate / payment) / math.log(1 + rate)
    return math.ceil(months)


def validate_estimate_inputs(balance: float, payment: float, apr: float) -> List[str]:
    """
    Check inputs for estimate_remaining_months.

    Zero or negative balances and payments are answerable (0 months and
    never, respectively), so only non-finite values and an APR outside
    0-100 are rejected.
    """
    if not all(math.isfinite(value) for value in (balance, payment, apr)):
        return ["Balance, payment, and APR must be finite numbers"]
    if apr < 0 or apr > 100:
        return ["APR must be between 0 and 100"]
    return []


def is_infinite(months: Months) -> bool:
    """Check whether an estimate is the never-pays-off sentinel."""
    return math.isinf(months)
