"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .lending import (
    ApplicationNotEditableException,
    ApplicationNotFoundException,
    BorrowerNotFoundException,
    InvalidApplicationException,
    InvalidStatusTransitionException,
    NothingDueException,
)
from .notification import (
    NotificationDeliveryException,
    NotificationQueueException,
)
from .payment import (
    InvalidPaymentRequestException,
    PaymentNotFoundException,
)
from .provider import (
    ProviderException,
    ProviderNotConfiguredException,
)

__all__ = [
    "DomainException",
    "ApplicationNotEditableException",
    "ApplicationNotFoundException",
    "BorrowerNotFoundException",
    "InvalidApplicationException",
    "InvalidStatusTransitionException",
    "NothingDueException",
    "NotificationDeliveryException",
    "NotificationQueueException",
    "InvalidPaymentRequestException",
    "PaymentNotFoundException",
    "ProviderException",
    "ProviderNotConfiguredException",
]
