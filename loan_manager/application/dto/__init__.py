"""Data Transfer Objects for application layer."""

from .lending import ApplicationInput, ApplicationUpdate, BorrowerSummary
from .notification import PaymentReminderRequest, ReminderDelivery
from .payment import (
    PaymentDetails,
    PaymentIntentRequest,
    PaymentIntentResult,
    PaymentResult,
    PaymentValidationResult,
    ProcessPaymentRequest,
    RefundRequest,
    RefundResult,
    ValidatePaymentRequest,
)

__all__ = [
    "ApplicationInput",
    "ApplicationUpdate",
    "BorrowerSummary",
    "PaymentReminderRequest",
    "ReminderDelivery",
    "PaymentDetails",
    "PaymentIntentRequest",
    "PaymentIntentResult",
    "PaymentResult",
    "PaymentValidationResult",
    "ProcessPaymentRequest",
    "RefundRequest",
    "RefundResult",
    "ValidatePaymentRequest",
]
