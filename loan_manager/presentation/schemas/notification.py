"""Notification service request and response schemas."""

from datetime import date
from typing import Literal, Optional

from pydantic import EmailStr, Field

from .common import CamelModel


class SendEmailSchema(CamelModel):
    """Schema for POST /api/v1/notifications/email[/async]."""

    to: EmailStr
    subject: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    html: Optional[str] = None
    from_email: Optional[EmailStr] = Field(None, alias="from")


class SendSmsSchema(CamelModel):
    """Schema for POST /api/v1/notifications/sms[/async]."""

    to: str = Field(..., min_length=10, examples=["+15551234567"])
    message: str = Field(..., min_length=1, max_length=1600)


class PaymentReminderSchema(CamelModel):
    """Schema for POST /api/v1/notifications/payment-reminder."""

    borrower_name: str = Field(..., min_length=1)
    borrower_email: EmailStr
    borrower_phone: Optional[str] = None
    due_amount: float = Field(..., gt=0, examples=[1010.0])
    due_date: date
    send_email: bool = True
    send_sms: bool = Field(False, alias="sendSMS")


class NotificationSentSchema(CamelModel):
    success: bool = True
    message_id: Optional[str] = None
    sent_at: str


class NotificationQueuedSchema(CamelModel):
    success: bool = True
    job_id: str
    status: Literal["queued"] = "queued"


class ReminderResultSchema(CamelModel):
    type: Literal["email", "sms"]
    message_id: Optional[str] = None
    sent_at: str


class PaymentReminderResponseSchema(CamelModel):
    success: bool = True
    results: list[ReminderResultSchema]
