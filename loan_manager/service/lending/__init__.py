"""
Loan terms and application lifecycle rules.
"""

from .interest import (
    LoanTerms,
    calculate_loan_terms,
    days_between,
    due_amount,
    simple_interest_total,
    to_money,
    to_rate,
    total_paid,
)
from .transitions import StatusTransition, apply_status_transition, promote_to_borrower

__all__ = [
    "LoanTerms",
    "calculate_loan_terms",
    "days_between",
    "due_amount",
    "simple_interest_total",
    "to_money",
    "to_rate",
    "total_paid",
    "StatusTransition",
    "apply_status_transition",
    "promote_to_borrower",
]
