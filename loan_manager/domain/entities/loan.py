"""Loan application, borrower and repayment entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


@dataclass
class LoanApplication:
    """
    A loan application awaiting (or past) an approval decision.

    days_between and total_amount are derived from the principal,
    rate and dates; they are recomputed whenever those change.
    """

    name: str
    loan_amount: Decimal
    rate_of_interest: Decimal
    start_date: date
    end_date: date
    days_between: int
    total_amount: Decimal
    status: ApplicationStatus = ApplicationStatus.PENDING
    sn_no: Optional[int] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING


@dataclass
class Borrower:
    """An approved application promoted to an active loan."""

    application_id: UUID
    name: str
    loan_amount: Decimal
    rate_of_interest: Decimal
    start_date: date
    end_date: date
    days_between: int
    total_amount: Decimal
    due_date: date
    status: ApplicationStatus = ApplicationStatus.APPROVED
    sn_no: Optional[int] = None
    numeric_id: Optional[int] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class BorrowerPayment:
    """A repayment recorded against a borrower."""

    borrower_id: UUID
    amount: Decimal
    paid_on: date
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
