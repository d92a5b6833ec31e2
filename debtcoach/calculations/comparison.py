"""
Loan Comparison

Runs the amortization calculator across several loan offers and picks the
best offer by monthly payment, total cost, and total interest.
"""

from typing import List, Tuple, Optional
from dataclasses import dataclass

from debtcoach.calculations.amortization import (
    LoanTerms,
    LoanCalculations,
    compute_amortization,
    validate_loan_ids,
)


@dataclass(frozen=True)
class ComparedLoan:
    """A loan offer with its computed cost structure."""

    id: str
    name: Optional[str]
    terms: LoanTerms
    calculations: LoanCalculations


@dataclass(frozen=True)
class BestOption:
    """Ids of the winning loan in each category."""

    lowest_payment: str
    lowest_total_cost: str
    lowest_interest: str


@dataclass(frozen=True)
class SavingsSummary:
    """Spread between the cheapest and most expensive offers."""

    monthly_payment_range: Tuple[float, float]  # (min, max)
    total_cost_range: Tuple[float, float]  # (min, max)
    potential_savings: float


@dataclass(frozen=True)
class LoanComparisonResult:
    """Side-by-side comparison of loan offers."""

    loans: Tuple[ComparedLoan, ...]
    best_option: BestOption
    savings: SavingsSummary


def _assign_ids(loans: List[LoanTerms]) -> List[str]:
    """
    Use each caller's id, or the 1-based position when none was given.

    A positional id that a caller already took gets a numeric suffix
    (loan-2-2, loan-2-3, ...) so every id in the result is unique.
    """
    taken = {terms.id for terms in loans if terms.id is not None}
    ids = []
    for index, terms in enumerate(loans):
        if terms.id is not None:
            ids.append(terms.id)
            continue
        candidate = f"loan-{index + 1}"
        suffix = 2
        while candidate in taken:
            candidate = f"loan-{index + 1}-{suffix}"
            suffix += 1
        taken.add(candidate)
        ids.append(candidate)
    return ids


def _pick_lowest(loans: List[ComparedLoan], metric) -> ComparedLoan:
    """Linear scan; a later loan only wins if strictly lower."""
    best = loans[0]
    for loan in loans[1:]:
        if metric(loan) < metric(best):
            best = loan
    return best


def compare_loans(loans: List[LoanTerms]) -> LoanComparisonResult:
    """
    Compare loan offers.

    Ties in any category go to the earliest loan in the input.

    Args:
        loans: Loan offers to compare

    Returns:
        LoanComparisonResult with per-loan calculations and best picks

    Raises:
        ValueError: If no loans are given or two loans share an id
    """
    if not loans:
        raise ValueError("At least one loan is required for comparison")
    errors = validate_loan_ids(loans)
    if errors:
        raise ValueError("; ".join(errors))

    compared = [
        ComparedLoan(
            id=loan_id,
            name=terms.name,
            terms=terms,
            calculations=compute_amortization(terms),
        )
        for loan_id, terms in zip(_assign_ids(loans), loans)
    ]

    best_payment = _pick_lowest(compared, lambda l: l.calculations.monthly_payment)
    best_total = _pick_lowest(compared, lambda l: l.calculations.total_cost)
    best_interest = _pick_lowest(compared, lambda l: l.calculations.total_interest)

    monthly_payments = [l.calculations.monthly_payment for l in compared]
    total_costs = [l.calculations.total_cost for l in compared]

    return LoanComparisonResult(
        loans=tuple(compared),
        best_option=BestOption(
            lowest_payment=best_payment.id,
            lowest_total_cost=best_total.id,
            lowest_interest=best_interest.id,
        ),
        savings=SavingsSummary(
            monthly_payment_range=(min(monthly_payments), max(monthly_payments)),
            total_cost_range=(min(total_costs), max(total_costs)),
            potential_savings=max(total_costs) - min(total_costs),
        ),
    )
