"""
Loan calculation API endpoints.

These endpoints accept loan terms and return calculated results.
"""

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from debtcoach.api.errors import raise_validation_error
from debtcoach.calculations.amortization import (
    LoanTerms,
    compute_amortization,
    validate_loan_ids,
    validate_loan_terms,
)
from debtcoach.calculations.analytics import aggregate_loan_analytics
from debtcoach.calculations.comparison import compare_loans
from debtcoach.calculations.red_flags import detect_red_flags, validate_red_flag_inputs
from debtcoach.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()


class LoanInput(BaseModel):
    """Loan terms input schema."""

    principal: float
    apr: float
    term_months: int
    fees: float = 0.0
    id: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=255)
    loan_type: str = "personal"

    def to_terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.principal,
            apr=self.apr,
            term_months=self.term_months,
            fees=self.fees,
            id=self.id,
            name=self.name,
            loan_type=self.loan_type,
        )


class AmortizationInput(LoanInput):
    """Input for amortization calculation."""

    include_schedule: bool = True


class RedFlagInput(BaseModel):
    """Input for red flag detection."""

    apr: float
    fees: float = 0.0
    principal: float


class LoanListInput(BaseModel):
    """A set of loan offers."""

    loans: List[LoanInput]


class ValidationResponse(BaseModel):
    """Result of validating loan terms."""

    valid: bool
    errors: List[str]


def _validated_terms(loans: List[LoanInput]) -> List[LoanTerms]:
    """Convert and validate every loan, rejecting the request on any error."""
    terms = [loan.to_terms() for loan in loans]
    errors = []
    for i, loan in enumerate(terms):
        label = loan.name or loan.id or f"Loan {i + 1}"
        errors.extend(f"{label}: {error}" for error in validate_loan_terms(loan))
    errors.extend(validate_loan_ids(terms))
    if errors:
        raise_validation_error("Invalid loan data", errors)
    return terms


@router.post("/validate", response_model=ValidationResponse)
async def validate_loan(inputs: LoanInput):
    """Check loan terms without calculating anything."""
    errors = validate_loan_terms(inputs.to_terms())
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/red-flags")
async def red_flags(inputs: RedFlagInput):
    """Flag predatory loan pricing."""
    errors = validate_red_flag_inputs(inputs.apr, inputs.fees, inputs.principal)
    if errors:
        raise_validation_error("Invalid loan data", errors)
    return {"red_flags": detect_red_flags(inputs.apr, inputs.fees, inputs.principal)}


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Calculate monthly payment, total cost, and amortization schedule."""
    terms = inputs.to_terms()
    errors = validate_loan_terms(terms)
    if errors:
        raise_validation_error("Invalid loan data", errors)

    calculations = compute_amortization(terms)

    return {
        "monthly_payment": calculations.monthly_payment,
        "total_interest": calculations.total_interest,
        "total_cost": calculations.total_cost,
        "red_flags": list(calculations.red_flags),
        "schedule": (
            [asdict(row) for row in calculations.schedule]
            if inputs.include_schedule
            else []
        ),
    }


@router.post("/compare")
async def compare(inputs: LoanListInput):
    """Compare loan offers side by side."""
    if not inputs.loans:
        raise_validation_error("Invalid comparison", ["At least one loan is required"])
    if len(inputs.loans) > settings.max_loans_per_comparison:
        raise_validation_error(
            "Invalid comparison",
            [f"Cannot compare more than {settings.max_loans_per_comparison} loans"],
        )

    result = compare_loans(_validated_terms(inputs.loans))
    logger.info(f"Compared {len(result.loans)} loans")

    return {
        "loans": [
            {
                "id": loan.id,
                "name": loan.name,
                "principal": loan.terms.principal,
                "apr": loan.terms.apr,
                "term_months": loan.terms.term_months,
                "fees": loan.terms.fees,
                "monthly_payment": loan.calculations.monthly_payment,
                "total_interest": loan.calculations.total_interest,
                "total_cost": loan.calculations.total_cost,
                "red_flags": list(loan.calculations.red_flags),
            }
            for loan in result.loans
        ],
        "best_option": asdict(result.best_option),
        "savings": {
            "monthly_payment_range": {
                "min": result.savings.monthly_payment_range[0],
                "max": result.savings.monthly_payment_range[1],
            },
            "total_cost_range": {
                "min": result.savings.total_cost_range[0],
                "max": result.savings.total_cost_range[1],
            },
            "potential_savings": result.savings.potential_savings,
        },
    }


@router.post("/analytics")
async def loan_analytics(inputs: LoanListInput):
    """Summarize a set of loan offers with recommendations."""
    analytics = aggregate_loan_analytics(_validated_terms(inputs.loans))
    return asdict(analytics)
