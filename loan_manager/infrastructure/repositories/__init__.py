"""Repository implementations."""

from .application_repository import PostgresApplicationRepository
from .borrower_repository import PostgresBorrowerRepository
from .repayment_repository import PostgresRepaymentRepository

__all__ = [
    "PostgresApplicationRepository",
    "PostgresBorrowerRepository",
    "PostgresRepaymentRepository",
]
