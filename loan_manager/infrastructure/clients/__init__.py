"""External API client implementations."""

from .notification_service_client import HttpNotificationServiceClient
from .sendgrid_client import SendGridEmailProvider
from .stripe_client import StripePaymentGateway
from .twilio_client import TwilioSmsProvider

__all__ = [
    "HttpNotificationServiceClient",
    "SendGridEmailProvider",
    "StripePaymentGateway",
    "TwilioSmsProvider",
]
