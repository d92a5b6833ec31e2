"""
Tests for portfolio analytics, loan comparison, and debt records.
"""

import math
import pytest
from datetime import date

from debtcoach.calculations.amortization import LoanTerms
from debtcoach.calculations.analytics import (
    aggregate_analytics,
    aggregate_loan_analytics,
    calculate_interest_with_minimums,
    generate_recommendations,
    next_payment_date,
)
from debtcoach.calculations.comparison import compare_loans
from debtcoach.calculations.debts import (
    Debt,
    DebtType,
    classify_debt_type,
    validate_debt,
    validate_debts,
)


class TestPortfolioAnalytics:
    """Test debt portfolio analytics."""

    def test_totals(self, two_debts):
        """Test total debt, minimums, and weighted APR."""
        analytics = aggregate_analytics(two_debts, as_of=date(2026, 3, 15))
        assert analytics.total_debt == 3000
        assert analytics.monthly_minimums == 75
        # (20 * 1000 + 15 * 2000) / 3000
        assert analytics.weighted_average_apr == pytest.approx(50000 / 3000)

    def test_worst_case_months(self, two_debts):
        """Test worst case is the slowest single debt at its minimum."""
        analytics = aggregate_analytics(two_debts, as_of=date(2026, 3, 15))
        # Card: -ln(1/3) / ln(1 + 0.2/12) = 66.5 months
        assert analytics.worst_case_payoff_months == 67

    def test_worst_case_infinite(self, two_debts, underwater_debt):
        """Test a debt that never pays off makes the worst case infinite."""
        analytics = aggregate_analytics(two_debts + [underwater_debt], as_of=date(2026, 3, 15))
        assert math.isinf(analytics.worst_case_payoff_months)

    def test_zero_balance_weighted_apr(self):
        """Test weighted APR is zero when nothing is owed."""
        debts = [Debt(id="a", name="A", balance=0, apr=22, minimum_payment=25)]
        analytics = aggregate_analytics(debts, as_of=date(2026, 3, 15))
        assert analytics.weighted_average_apr == 0
        assert analytics.worst_case_payoff_months == 0

    def test_empty_portfolio(self):
        """Test analytics for no debts."""
        analytics = aggregate_analytics([], as_of=date(2026, 3, 15))
        assert analytics.total_debt == 0
        assert analytics.weighted_average_apr == 0
        assert analytics.debts_by_type == {}
        assert analytics.upcoming_payments == []

    def test_debts_by_type(self, two_debts):
        """Test grouping by debt type."""
        extra = Debt(id="card2", name="Store Card", balance=400, apr=27, minimum_payment=20,
                     debt_type=DebtType.credit_card)
        analytics = aggregate_analytics(two_debts + [extra], as_of=date(2026, 3, 15))
        assert analytics.debts_by_type["credit_card"] == {"count": 2, "total_balance": 1400}
        assert analytics.debts_by_type["personal_loan"] == {"count": 1, "total_balance": 2000}

    def test_interest_with_minimums(self, underwater_debt):
        """Test interest estimate skips debts that never pay off."""
        zero_rate = Debt(id="a", name="A", balance=1200, apr=0, minimum_payment=100)
        assert calculate_interest_with_minimums([zero_rate]) == 0
        assert calculate_interest_with_minimums([zero_rate, underwater_debt]) == 0

        card = Debt(id="b", name="B", balance=1000, apr=12, minimum_payment=100)
        # 11 payments of 100 against a 1000 balance
        assert calculate_interest_with_minimums([card]) == pytest.approx(100)


class TestUpcomingPayments:
    """Test due date roll-forward and upcoming payments."""

    def test_future_due_date_unchanged(self):
        """Test a due date after as_of is returned as is."""
        assert next_payment_date(date(2026, 4, 2), date(2026, 3, 15)) == date(2026, 4, 2)

    def test_past_due_date_rolls_forward(self):
        """Test a past due date rolls to the next monthly occurrence."""
        assert next_payment_date(date(2025, 11, 20), date(2026, 3, 15)) == date(2026, 3, 20)
        assert next_payment_date(date(2025, 11, 10), date(2026, 3, 15)) == date(2026, 4, 10)

    def test_due_today_rolls_to_next_month(self):
        """Test a due date equal to as_of moves to next month."""
        assert next_payment_date(date(2026, 1, 15), date(2026, 3, 15)) == date(2026, 4, 15)

    def test_month_end_does_not_drift(self):
        """Test a 31st due date clamps to short months without drifting."""
        assert next_payment_date(date(2026, 1, 31), date(2026, 2, 10)) == date(2026, 2, 28)
        assert next_payment_date(date(2026, 1, 31), date(2026, 3, 1)) == date(2026, 3, 31)

    def test_upcoming_sorted_and_filtered(self):
        """Test only payments inside the horizon are listed, soonest first."""
        debts = [
            Debt(id="late", name="Late", balance=100, apr=10, minimum_payment=25,
                 due_date=date(2026, 1, 31)),
            Debt(id="soon", name="Soon", balance=100, apr=10, minimum_payment=30,
                 due_date=date(2026, 1, 20)),
            Debt(id="far", name="Far", balance=100, apr=10, minimum_payment=35,
                 due_date=date(2026, 6, 1)),
            Debt(id="none", name="No Date", balance=100, apr=10, minimum_payment=40),
        ]
        analytics = aggregate_analytics(debts, as_of=date(2026, 3, 15), horizon_days=30)
        upcoming = analytics.upcoming_payments
        assert [p.debt_id for p in upcoming] == ["soon", "late"]
        assert upcoming[0].due_date == date(2026, 3, 20)
        assert upcoming[0].amount == 30
        assert upcoming[1].due_date == date(2026, 3, 31)

    def test_horizon(self):
        """Test a shorter horizon drops later payments."""
        debts = [
            Debt(id="a", name="A", balance=100, apr=10, minimum_payment=25,
                 due_date=date(2026, 3, 31)),
        ]
        analytics = aggregate_analytics(debts, as_of=date(2026, 3, 15), horizon_days=7)
        assert analytics.upcoming_payments == []


class TestLoanComparison:
    """Test loan comparison."""

    def test_lower_apr_wins(self):
        """Test lower APR wins on interest and total cost."""
        loans = [
            LoanTerms(id="pricey", principal=20000, apr=9.0, term_months=60),
            LoanTerms(id="cheap", principal=20000, apr=6.0, term_months=60),
        ]
        result = compare_loans(loans)
        assert result.best_option.lowest_interest == "cheap"
        assert result.best_option.lowest_total_cost == "cheap"
        assert result.best_option.lowest_payment == "cheap"

    def test_longer_term_lowers_payment(self):
        """Test a longer term wins on payment but loses on cost."""
        loans = [
            LoanTerms(id="short", principal=20000, apr=7.0, term_months=36),
            LoanTerms(id="long", principal=20000, apr=7.0, term_months=72),
        ]
        result = compare_loans(loans)
        assert result.best_option.lowest_payment == "long"
        assert result.best_option.lowest_total_cost == "short"

    def test_ties_go_to_first_loan(self):
        """Test identical loans resolve to the earliest one."""
        loans = [
            LoanTerms(id="first", principal=5000, apr=8.0, term_months=24),
            LoanTerms(id="second", principal=5000, apr=8.0, term_months=24),
        ]
        result = compare_loans(loans)
        assert result.best_option.lowest_payment == "first"
        assert result.best_option.lowest_total_cost == "first"
        assert result.best_option.lowest_interest == "first"
        assert result.savings.potential_savings == 0

    def test_ranges_and_savings(self):
        """Test payment and cost ranges across loans."""
        loans = [
            LoanTerms(principal=10000, apr=5.0, term_months=36),
            LoanTerms(principal=10000, apr=12.0, term_months=36, fees=300),
            LoanTerms(principal=10000, apr=8.0, term_months=48),
        ]
        result = compare_loans(loans)
        payments = [l.calculations.monthly_payment for l in result.loans]
        costs = [l.calculations.total_cost for l in result.loans]
        assert result.savings.monthly_payment_range == (min(payments), max(payments))
        assert result.savings.total_cost_range == (min(costs), max(costs))
        assert result.savings.potential_savings == pytest.approx(max(costs) - min(costs))

    def test_default_ids(self):
        """Test loans without ids are numbered by position."""
        result = compare_loans([LoanTerms(principal=1000, apr=5, term_months=12)])
        assert result.loans[0].id == "loan-1"
        assert result.best_option.lowest_payment == "loan-1"

    def test_default_ids_skip_caller_ids(self):
        """Test a positional id already used by a caller is not reused."""
        loans = [
            LoanTerms(id="loan-2", principal=1000, apr=9, term_months=12),
            LoanTerms(principal=1000, apr=5, term_months=12),
        ]
        result = compare_loans(loans)
        ids = [loan.id for loan in result.loans]
        assert ids == ["loan-2", "loan-2-2"]
        assert result.best_option.lowest_interest == "loan-2-2"

    def test_duplicate_ids_rejected(self):
        """Test two loans sharing an id cannot be compared."""
        loans = [
            LoanTerms(id="offer", principal=1000, apr=9, term_months=12),
            LoanTerms(id="offer", principal=1000, apr=5, term_months=12),
        ]
        with pytest.raises(ValueError, match="Duplicate loan id 'offer'"):
            compare_loans(loans)

    def test_red_flags_included(self):
        """Test each compared loan carries its red flags."""
        result = compare_loans([LoanTerms(principal=1000, apr=45, term_months=12)])
        assert len(result.loans[0].calculations.red_flags) == 2

    def test_empty_comparison(self):
        """Test comparing nothing is rejected."""
        with pytest.raises(ValueError):
            compare_loans([])


class TestLoanAnalytics:
    """Test loan offer analytics and recommendations."""

    def test_loan_analytics(self):
        """Test totals, red flag count, and type grouping."""
        loans = [
            LoanTerms(principal=10000, apr=7.0, term_months=36),
            LoanTerms(principal=10000, apr=29.9, term_months=72, fees=600, loan_type="payday"),
        ]
        analytics = aggregate_loan_analytics(loans)
        assert analytics.total_loan_value == 20000
        assert analytics.average_apr == pytest.approx((7.0 + 29.9) / 2)
        assert analytics.potential_red_flags == 2
        assert analytics.loans_by_type == {
            "personal": {"count": 1, "total_value": 10000},
            "payday": {"count": 1, "total_value": 10000},
        }
        assert len(analytics.recommendations) == 6

    def test_no_loans(self):
        """Test analytics with no loans."""
        analytics = aggregate_loan_analytics([])
        assert analytics.average_apr == 0
        assert analytics.total_monthly_payments == 0
        assert analytics.recommendations == [
            "Add loan options to compare and find the best deal"
        ]

    def test_single_good_loan_has_no_advice(self):
        """Test a single cheap short loan triggers no recommendations."""
        loans = [LoanTerms(principal=10000, apr=6.0, term_months=36, fees=100)]
        assert generate_recommendations(loans) == []


class TestDebtRecords:
    """Test debt validation and type classification."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Credit Card", DebtType.credit_card),
            ("credit_card", DebtType.credit_card),
            ("Student Loan", DebtType.student_loan),
            ("Car loan", DebtType.auto_loan),
            ("Home equity", DebtType.mortgage),
            ("Personal", DebtType.personal_loan),
            ("Line of Credit", DebtType.line_of_credit),
            ("Store Card", DebtType.credit_card),
            ("HELOC", DebtType.other),
            (None, DebtType.other),
        ],
    )
    def test_classify_debt_type(self, label, expected):
        """Test free-form labels map onto debt types."""
        assert classify_debt_type(label) == expected

    def test_valid_debt(self, two_debts):
        """Test valid debts produce no errors."""
        assert validate_debts(two_debts) == []

    def test_all_debt_errors_reported(self):
        """Test every violated debt constraint is reported."""
        debt = Debt(id="x", name="Bad", balance=-1, apr=150, minimum_payment=0)
        errors = validate_debt(debt)
        assert len(errors) == 3

    def test_missing_name(self):
        """Test blank names are rejected."""
        debt = Debt(id="x", name=" ", balance=10, apr=5, minimum_payment=5)
        assert validate_debt(debt) == ["Debt name is required"]

    def test_duplicate_ids(self, two_debts):
        """Test duplicate debt ids are rejected."""
        errors = validate_debts(two_debts + [two_debts[0]])
        assert errors == ["Duplicate debt id 'card'"]
