"""
Debt records and input validation.
"""

import enum
import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional


class DebtType(str, enum.Enum):
    """Debt type enumeration."""

    credit_card = "credit_card"
    student_loan = "student_loan"
    auto_loan = "auto_loan"
    mortgage = "mortgage"
    personal_loan = "personal_loan"
    line_of_credit = "line_of_credit"
    other = "other"


@dataclass(frozen=True)
class Debt:
    """A single outstanding debt."""

    id: str
    name: str
    balance: float
    apr: float  # Annual percentage rate, 0-100
    minimum_payment: float
    debt_type: DebtType = DebtType.other
    due_date: Optional[date] = None  # Any past or future monthly due date


# Checked in order, first match wins
_TYPE_KEYWORDS = [
    (("line of credit", "credit line"), DebtType.line_of_credit),
    (("credit", "card"), DebtType.credit_card),
    (("student",), DebtType.student_loan),
    (("auto", "car loan", "vehicle"), DebtType.auto_loan),
    (("mortgage", "home"), DebtType.mortgage),
    (("personal",), DebtType.personal_loan),
    (("line",), DebtType.line_of_credit),
]


def classify_debt_type(label: Optional[str]) -> DebtType:
    """
    Map a free-form account type label onto a DebtType.

    Examples:
        "Credit Card" -> credit_card
        "auto" -> auto_loan
        "HELOC" -> other
    """
    if not label:
        return DebtType.other

    lowered = label.lower()
    if lowered in DebtType.__members__:
        return DebtType(lowered)

    for keywords, debt_type in _TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return debt_type

    return DebtType.other


def validate_debt(debt: Debt) -> List[str]:
    """
    Validate a debt record.

    Returns:
        List of human-readable error messages (empty when valid)
    """
    errors = []
    label = debt.name or debt.id

    if not debt.name or not debt.name.strip():
        errors.append("Debt name is required")
    elif len(debt.name) > 255:
        errors.append(f"Debt name for '{label[:20]}...' cannot exceed 255 characters")

    numbers = (debt.balance, debt.apr, debt.minimum_payment)
    if not all(math.isfinite(value) for value in numbers):
        errors.append(f"Values for '{label}' must be finite numbers")
        return errors

    if debt.balance < 0:
        errors.append(f"Balance for '{label}' cannot be negative")
    if debt.apr < 0 or debt.apr > 100:
        errors.append(f"APR for '{label}' must be between 0 and 100")
    if debt.minimum_payment <= 0:
        errors.append(f"Minimum payment for '{label}' must be greater than 0")

    return errors


def validate_debts(debts: List[Debt]) -> List[str]:
    """Validate a set of debts, collecting errors from every record."""
    errors = []
    seen_ids = set()

    for debt in debts:
        errors.extend(validate_debt(debt))
        if debt.id in seen_ids:
            errors.append(f"Duplicate debt id '{debt.id}'")
        seen_ids.add(debt.id)

    return errors
