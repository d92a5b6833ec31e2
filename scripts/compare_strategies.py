"""
Compare snowball and avalanche payoff for a sample debt set.
Prints months to debt-free and total interest for each strategy.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from debtcoach.calculations.debts import Debt, DebtType
from debtcoach.calculations.payoff import PayoffStrategy, simulate_payoff, summarize_payoff

SAMPLE_DEBTS = [
    Debt(id="visa", name="Visa", balance=4200, apr=24.99, minimum_payment=120,
         debt_type=DebtType.credit_card),
    Debt(id="store", name="Store Card", balance=850, apr=27.5, minimum_payment=35,
         debt_type=DebtType.credit_card),
    Debt(id="car", name="Auto Loan", balance=11500, apr=6.9, minimum_payment=310,
         debt_type=DebtType.auto_loan),
    Debt(id="student", name="Student Loan", balance=18000, apr=4.5, minimum_payment=190,
         debt_type=DebtType.student_loan),
]


def main(extra_payment: float = 250.0):
    print(f"Debts: {len(SAMPLE_DEBTS)}, total ${sum(d.balance for d in SAMPLE_DEBTS):,.2f}")
    print(f"Extra payment: ${extra_payment:,.2f}/month\n")

    summaries = {}
    for strategy_type in ("snowball", "avalanche"):
        timeline = simulate_payoff(
            SAMPLE_DEBTS, PayoffStrategy(type=strategy_type, extra_payment=extra_payment)
        )
        summary = summarize_payoff(timeline)
        summaries[strategy_type] = summary

        print(f"{strategy_type.title()}:")
        print(f"  Months to debt-free: {summary.months}")
        print(f"  Total interest: ${summary.total_interest:,.2f}")
        print(f"  Total paid: ${summary.total_paid:,.2f}")
        if summary.capped:
            print(f"  Capped with ${summary.final_balance:,.2f} outstanding")

    saved = summaries["snowball"].total_interest - summaries["avalanche"].total_interest
    print(f"\nAvalanche saves ${saved:,.2f} in interest over snowball")


if __name__ == "__main__":
    extra = float(sys.argv[1]) if len(sys.argv) > 1 else 250.0
    main(extra)
