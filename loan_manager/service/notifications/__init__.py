"""
Notification message templates.
"""

from .templates import (
    EmailContent,
    format_date,
    format_usd,
    payment_reminder_email,
    payment_reminder_sms,
)

__all__ = [
    "EmailContent",
    "format_date",
    "format_usd",
    "payment_reminder_email",
    "payment_reminder_sms",
]
