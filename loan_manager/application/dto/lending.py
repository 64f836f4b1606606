"""Data transfer objects for loan application and borrower operations."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from loan_manager.domain.entities import Borrower


@dataclass(frozen=True)
class ApplicationInput:
    """Fields supplied when creating an application."""

    name: str
    loan_amount: Decimal
    rate_of_interest: Decimal
    start_date: date
    end_date: date

    def validate(self) -> list[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        if self.loan_amount <= 0:
            errors.append("loan_amount must be positive")

        if self.rate_of_interest < 0:
            errors.append("rate_of_interest cannot be negative")

        if self.end_date < self.start_date:
            errors.append("end_date cannot be before start_date")

        return errors


@dataclass(frozen=True)
class ApplicationUpdate:
    """Partial edit of an application; None leaves a field unchanged."""

    name: Optional[str] = None
    loan_amount: Optional[Decimal] = None
    rate_of_interest: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class BorrowerSummary:
    """A borrower with its repayment position."""

    borrower: Borrower
    total_paid: Decimal
    due_amount: Decimal
