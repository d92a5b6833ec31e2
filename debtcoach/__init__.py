"""
Loan cost analysis and debt payoff planning.
"""

__version__ = "0.1.0"
