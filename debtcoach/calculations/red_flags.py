"""
Predatory Lending Red Flags

Heuristic checks on loan pricing. Each threshold is evaluated on its own,
so a single loan can trip several flags at once.
"""

import math
from typing import List

HIGH_APR = 25.0
PREDATORY_APR = 36.0
PAYDAY_APR = 50.0

HIGH_FEE_RATIO = 0.05
EXCESSIVE_FEE_RATIO = 0.10


def detect_red_flags(apr: float, fees: float, principal: float) -> List[str]:
    """
    Flag loan terms that look predatory.

    Args:
        apr: Annual percentage rate (e.g., 29.9 for 29.9%)
        fees: Upfront fees in dollars
        principal: Loan principal in dollars

    Returns:
        Ordered list of flag messages, APR flags first
    """
    flags = []

    if apr > HIGH_APR:
        flags.append("Extremely high APR (>25%) - possible predatory lending")
    if apr > PREDATORY_APR:
        flags.append("APR exceeds 36% - likely predatory lending")
    if apr > PAYDAY_APR:
        flags.append("Payday loan APR levels (>50%) - extremely dangerous")

    if fees > principal * HIGH_FEE_RATIO:
        flags.append("High upfront fees (>5% of principal)")
    if fees > principal * EXCESSIVE_FEE_RATIO:
        flags.append("Excessive fees (>10% of principal) - major red flag")

    return flags


def validate_red_flag_inputs(apr: float, fees: float, principal: float) -> List[str]:
    """Check the pricing fields the red flag heuristics compare against."""
    errors = []

    if not all(math.isfinite(value) for value in (apr, fees, principal)):
        errors.append("Loan values must be finite numbers")
        return errors

    if principal <= 0:
        errors.append("Principal must be greater than 0")
    if apr < 0 or apr > 100:
        errors.append("APR must be between 0 and 100")
    if fees < 0:
        errors.append("Fees cannot be negative")

    return errors
