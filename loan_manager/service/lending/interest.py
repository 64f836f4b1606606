"""
Simple interest terms for loan applications.

Interest accrues on the principal at rate_of_interest percent per
30-day period, pro-rated by day. Totals are rounded half-up to cents.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENTS = Decimal("0.01")
RATE_PLACES = Decimal("0.0001")
DAYS_PER_PERIOD = 30


@dataclass(frozen=True)
class LoanTerms:
    days_between: int
    total_amount: Decimal


def to_money(value) -> Decimal:
    """Quantize a number to cents, rounding half-up."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_rate(value) -> Decimal:
    """Quantize an interest rate to the four places it is stored with."""
    return Decimal(str(value)).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def days_between(start_date: date, end_date: date) -> int:
    return (end_date - start_date).days


def simple_interest_total(
    principal: Decimal,
    rate_of_interest: Decimal,
    days: int,
) -> Decimal:
    """
    principal + principal * rate/100 * (days/30), rounded to cents.

    Args:
        principal: Loan amount
        rate_of_interest: Percent charged per 30 days
        days: Length of the loan in days
    """
    principal = Decimal(str(principal))
    rate = Decimal(str(rate_of_interest)) / 100
    interest = principal * rate * Decimal(days) / DAYS_PER_PERIOD
    return to_money(principal + interest)


def calculate_loan_terms(
    principal: Decimal,
    rate_of_interest: Decimal,
    start_date: date,
    end_date: date,
) -> LoanTerms:
    days = days_between(start_date, end_date)
    return LoanTerms(
        days_between=days,
        total_amount=simple_interest_total(principal, rate_of_interest, days),
    )


def total_paid(amounts: Iterable[Decimal]) -> Decimal:
    return to_money(sum((Decimal(str(a)) for a in amounts), Decimal("0")))


def due_amount(total_amount: Decimal, paid: Decimal) -> Decimal:
    """Outstanding balance; never negative once overpaid."""
    return max(to_money(Decimal(str(total_amount)) - Decimal(str(paid))), Decimal("0.00"))
