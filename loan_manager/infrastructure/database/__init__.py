"""Database infrastructure."""

from .connection import DatabaseSessionManager, db_manager, get_db_session, to_async_url
from .models import Base, BorrowerModel, BorrowerPaymentModel, LoanApplicationModel

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "to_async_url",
    "Base",
    "BorrowerModel",
    "BorrowerPaymentModel",
    "LoanApplicationModel",
]
