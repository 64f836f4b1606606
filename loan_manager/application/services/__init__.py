"""Application Services - Use case orchestration."""

from .application_service import ApplicationService
from .borrower_service import BorrowerService
from .notification_service import NotificationService
from .payment_service import PaymentService

__all__ = [
    "ApplicationService",
    "BorrowerService",
    "NotificationService",
    "PaymentService",
]
