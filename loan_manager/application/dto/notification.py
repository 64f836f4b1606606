"""Data transfer objects for notification operations."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from loan_manager.domain.entities import DeliveryReceipt, NotificationChannel


@dataclass(frozen=True)
class PaymentReminderRequest:
    """Input for a templated payment reminder."""

    borrower_name: str
    borrower_email: str
    due_amount: float
    due_date: date
    borrower_phone: Optional[str] = None
    send_email: bool = True
    send_sms: bool = False


@dataclass(frozen=True)
class ReminderDelivery:
    """One channel's outcome within a payment reminder."""

    type: NotificationChannel
    receipt: DeliveryReceipt
