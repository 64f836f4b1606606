"""
Domain Interfaces (Ports)
"""

from .repositories import ApplicationRepository, BorrowerRepository, RepaymentRepository
from .clients import (
    EmailProvider,
    NotificationQueue,
    NotificationServiceClient,
    PaymentGateway,
    SmsProvider,
)

__all__ = [
    "ApplicationRepository",
    "BorrowerRepository",
    "RepaymentRepository",
    "EmailProvider",
    "NotificationQueue",
    "NotificationServiceClient",
    "PaymentGateway",
    "SmsProvider",
]
