"""External client interfaces."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, Optional

from loan_manager.domain.entities import (
    DeliveryReceipt,
    EmailMessage,
    NotificationJob,
    PaymentIntent,
    Refund,
    SmsMessage,
)


class EmailProvider(ABC):
    """
    Abstract client for a transactional email provider.
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        """
        Hand an email off to the provider.

        Args:
            message: The email to send; from_email is already resolved

        Returns:
            A receipt carrying the provider's message id

        Raises:
            ProviderNotConfiguredException: If credentials are missing
            ProviderException: If the provider rejects the request
        """
        ...


class SmsProvider(ABC):
    """Abstract client for an SMS provider."""

    @abstractmethod
    async def send(self, message: SmsMessage) -> DeliveryReceipt:
        """
        Hand an SMS off to the provider.

        Raises:
            ProviderNotConfiguredException: If credentials are missing
            ProviderException: If the provider rejects the request
        """
        ...


class PaymentGateway(ABC):
    """
    Abstract client for the card/ACH payment processor.

    All amounts are in minor units (cents).
    """

    @abstractmethod
    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: Dict[str, str],
        payment_method_id: Optional[str] = None,
        confirm: bool = False,
        description: Optional[str] = None,
    ) -> PaymentIntent:
        ...

    @abstractmethod
    async def retrieve_payment_intent(self, payment_intent_id: str) -> Optional[PaymentIntent]:
        """
        Fetch a payment intent.

        Returns:
            The intent, or None if the processor reports it missing
        """
        ...

    @abstractmethod
    async def create_refund(
        self,
        payment_intent_id: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> Refund:
        """Refund a payment intent in full, or partially when amount is set."""
        ...


class NotificationQueue(ABC):
    """Abstract queue for deferred email/SMS delivery."""

    @abstractmethod
    async def enqueue_email(self, message: EmailMessage) -> NotificationJob:
        """
        Queue an email for background delivery.

        Raises:
            NotificationQueueException: If the job could not be queued
        """
        ...

    @abstractmethod
    async def enqueue_sms(self, message: SmsMessage) -> NotificationJob:
        ...


class NotificationServiceClient(ABC):
    """Client used by the lending API to reach the notification service."""

    @abstractmethod
    async def send_email(self, to: str, subject: str, body: str) -> Dict[str, Any]:
        """
        Send an email through the notification service.

        Raises:
            NotificationDeliveryException: If the service reports a failure
        """
        ...

    @abstractmethod
    async def send_payment_reminder(
        self,
        borrower_name: str,
        borrower_email: str,
        due_amount: float,
        due_date: date,
        borrower_phone: Optional[str] = None,
        send_email: bool = True,
        send_sms: bool = False,
    ) -> Dict[str, Any]:
        ...
