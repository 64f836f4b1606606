"""Pydantic schemas for API request/response validation."""

from .common import CamelModel, ErrorResponseSchema, HistoryResponseSchema
from .lending import (
    ApplicationCreateSchema,
    ApplicationListResponseSchema,
    ApplicationResponseSchema,
    ApplicationSchema,
    ApplicationUpdateSchema,
    BorrowerListResponseSchema,
    BorrowerResponseSchema,
    BorrowerSchema,
    DeletedResponseSchema,
    LegacyNotifySchema,
    ReminderRequestSchema,
    ReminderResponseSchema,
    RepaymentCreateSchema,
    RepaymentListResponseSchema,
    RepaymentResponseSchema,
    RepaymentSchema,
    StatusChangeResponseSchema,
)
from .notification import (
    NotificationQueuedSchema,
    NotificationSentSchema,
    PaymentReminderResponseSchema,
    PaymentReminderSchema,
    ReminderResultSchema,
    SendEmailSchema,
    SendSmsSchema,
)
from .payment import (
    CreateIntentSchema,
    PaymentDetailsResponseSchema,
    PaymentDetailsSchema,
    PaymentHistoryResponseSchema,
    PaymentIntentSchema,
    PaymentResultSchema,
    PaymentValidationSchema,
    ProcessPaymentSchema,
    RefundResultSchema,
    RefundSchema,
    ValidatePaymentSchema,
)

__all__ = [
    "CamelModel",
    "ErrorResponseSchema",
    "HistoryResponseSchema",
    "ApplicationCreateSchema",
    "ApplicationListResponseSchema",
    "ApplicationResponseSchema",
    "ApplicationSchema",
    "ApplicationUpdateSchema",
    "BorrowerListResponseSchema",
    "BorrowerResponseSchema",
    "BorrowerSchema",
    "DeletedResponseSchema",
    "LegacyNotifySchema",
    "ReminderRequestSchema",
    "ReminderResponseSchema",
    "RepaymentCreateSchema",
    "RepaymentListResponseSchema",
    "RepaymentResponseSchema",
    "RepaymentSchema",
    "StatusChangeResponseSchema",
    "NotificationQueuedSchema",
    "NotificationSentSchema",
    "PaymentReminderResponseSchema",
    "PaymentReminderSchema",
    "ReminderResultSchema",
    "SendEmailSchema",
    "SendSmsSchema",
    "CreateIntentSchema",
    "PaymentDetailsResponseSchema",
    "PaymentDetailsSchema",
    "PaymentHistoryResponseSchema",
    "PaymentIntentSchema",
    "PaymentResultSchema",
    "PaymentValidationSchema",
    "ProcessPaymentSchema",
    "RefundResultSchema",
    "RefundSchema",
    "ValidatePaymentSchema",
]
