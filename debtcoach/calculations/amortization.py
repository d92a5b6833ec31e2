"""
Loan Amortization Calculations

Implements fixed-rate loan payment and amortization schedule calculations.
APRs are expressed as percentages (e.g., 5.0 for 5%), matching how lenders
quote them.
"""

import math
from typing import List, Optional, Tuple
from dataclasses import dataclass

from debtcoach.calculations.red_flags import detect_red_flags

MAX_PRINCIPAL = 10_000_000
MAX_TERM_MONTHS = 600


@dataclass(frozen=True)
class LoanTerms:
    """Terms of a single fixed-rate loan offer."""

    principal: float
    apr: float  # Annual percentage rate, 0-100
    term_months: int
    fees: float = 0.0  # Upfront fees, amortized with the principal
    id: Optional[str] = None
    name: Optional[str] = None
    loan_type: str = "personal"


@dataclass(frozen=True)
class AmortizationEntry:
    """One month of an amortization schedule."""

    month: int
    payment: float
    interest: float
    principal: float
    balance: float
    cumulative_interest: float
    cumulative_principal: float


@dataclass(frozen=True)
class LoanCalculations:
    """Computed cost structure of a loan."""

    monthly_payment: float
    total_interest: float
    total_cost: float
    schedule: Tuple[AmortizationEntry, ...]
    red_flags: Tuple[str, ...]


def monthly_rate(apr: float) -> float:
    """Convert an APR percentage to a monthly decimal rate."""
    return apr / 100 / 12


def calculate_monthly_payment(
    principal: float, apr: float, term_months: int
) -> float:
    """
    Calculate the fixed monthly payment for a loan.

    Args:
        principal: Amount being amortized
        apr: Annual percentage rate (e.g., 5.0 for 5%)
        term_months: Loan term in months

    Returns:
        Monthly payment amount
    """
    if apr == 0:
        return principal / term_months

    rate = monthly_rate(apr)
    growth = (1 + rate) ** term_months
    denominator = growth - 1

    # Tiny rates can round the annuity denominator to zero
    if denominator == 0 or not math.isfinite(denominator):
        return principal / term_months

    payment = principal * rate * growth / denominator
    if not math.isfinite(payment):
        return principal / term_months

    return payment


def generate_amortization_schedule(
    principal: float, apr: float, term_months: int
) -> List[AmortizationEntry]:
    """
    Generate a full amortization schedule.

    The final payment is capped so the balance never goes negative, and no
    rows are emitted once the balance is paid off.

    Args:
        principal: Amount being amortized
        apr: Annual percentage rate
        term_months: Loan term in months

    Returns:
        List of amortization rows, one per month
    """
    payment = calculate_monthly_payment(principal, apr, term_months)
    rate = monthly_rate(apr)

    schedule = []
    balance = principal
    cumulative_interest = 0.0
    cumulative_principal = 0.0

    for month in range(1, term_months + 1):
        interest = balance * rate
        principal_pmt = min(payment - interest, balance)

        balance -= principal_pmt
        cumulative_interest += interest
        cumulative_principal += principal_pmt

        schedule.append(
            AmortizationEntry(
                month=month,
                payment=payment,
                interest=interest,
                principal=principal_pmt,
                balance=max(0.0, balance),
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
            )
        )

        if balance <= 0:
            break

    return schedule


def compute_amortization(terms: LoanTerms) -> LoanCalculations:
    """
    Calculate payment, schedule, and total cost for a loan.

    Fees are financed: the amortized base is principal plus fees. Red flags
    are evaluated against the principal alone.
    """
    financed = terms.principal + terms.fees
    monthly_payment = calculate_monthly_payment(financed, terms.apr, terms.term_months)
    schedule = generate_amortization_schedule(financed, terms.apr, terms.term_months)

    total_interest = schedule[-1].cumulative_interest if schedule else 0.0

    return LoanCalculations(
        monthly_payment=monthly_payment,
        total_interest=total_interest,
        total_cost=financed + total_interest,
        schedule=tuple(schedule),
        red_flags=tuple(detect_red_flags(terms.apr, terms.fees, terms.principal)),
    )


def calculate_total_interest(schedule: List[AmortizationEntry]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row.interest for row in schedule)


def validate_loan_inputs(
    principal: float, apr: float, term_months: int, fees: float = 0.0
) -> List[str]:
    """
    Validate loan parameters.

    Every violated constraint is reported, not just the first one.

    Returns:
        List of human-readable error messages (empty when valid)
    """
    errors = []

    if not all(math.isfinite(value) for value in (principal, apr, term_months, fees)):
        errors.append("Loan values must be finite numbers")
        return errors

    if principal <= 0:
        errors.append("Principal must be greater than 0")
    if principal > MAX_PRINCIPAL:
        errors.append(f"Principal cannot exceed ${MAX_PRINCIPAL:,}")
    if apr < 0 or apr > 100:
        errors.append("APR must be between 0 and 100")
    if term_months <= 0 or term_months > MAX_TERM_MONTHS:
        errors.append(f"Term must be between 1 and {MAX_TERM_MONTHS} months")
    elif int(term_months) != term_months:
        errors.append("Term must be a whole number of months")
    if fees < 0:
        errors.append("Fees cannot be negative")
    if fees > principal:
        errors.append("Fees cannot exceed principal amount")

    return errors


def validate_loan_terms(terms: LoanTerms) -> List[str]:
    """Validate a LoanTerms record."""
    return validate_loan_inputs(
        terms.principal, terms.apr, terms.term_months, terms.fees
    )


def validate_loan_ids(loans: List[LoanTerms]) -> List[str]:
    """Report caller-supplied loan ids that appear more than once."""
    errors = []
    seen_ids = set()

    for loan in loans:
        if loan.id is None:
            continue
        if loan.id in seen_ids:
            errors.append(f"Duplicate loan id '{loan.id}'")
        seen_ids.add(loan.id)

    return errors
