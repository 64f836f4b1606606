"""Domain Entities - Core business objects."""

from .loan import (
    ApplicationStatus,
    Borrower,
    BorrowerPayment,
    LoanApplication,
)
from .notification import (
    DeliveryReceipt,
    EmailMessage,
    JobKind,
    JobStatus,
    NotificationChannel,
    NotificationJob,
    SmsMessage,
)
from .payment import PaymentIntent, PaymentMethod, Refund

__all__ = [
    "ApplicationStatus",
    "Borrower",
    "BorrowerPayment",
    "LoanApplication",
    "DeliveryReceipt",
    "EmailMessage",
    "JobKind",
    "JobStatus",
    "NotificationChannel",
    "NotificationJob",
    "SmsMessage",
    "PaymentIntent",
    "PaymentMethod",
    "Refund",
]
