"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from debtcoach.main import app
from debtcoach.calculations.debts import Debt, DebtType


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def two_debts():
    """Small credit card plus a larger, cheaper loan."""
    return [
        Debt(id="card", name="Credit Card", balance=1000, apr=20, minimum_payment=25,
             debt_type=DebtType.credit_card),
        Debt(id="loan", name="Personal Loan", balance=2000, apr=15, minimum_payment=50,
             debt_type=DebtType.personal_loan),
    ]


@pytest.fixture
def underwater_debt():
    """Debt whose minimum payment never covers its interest."""
    return Debt(id="payday", name="Payday Loan", balance=5000, apr=30, minimum_payment=50)
