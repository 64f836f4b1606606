"""Notification service - orchestrates email and SMS delivery."""

from typing import List, Optional

import structlog

from loan_manager.application.dto import PaymentReminderRequest, ReminderDelivery
from loan_manager.core.metrics import record_notification
from loan_manager.domain.entities import (
    DeliveryReceipt,
    EmailMessage,
    NotificationChannel,
    NotificationJob,
    SmsMessage,
)
from loan_manager.domain.exceptions import (
    NotificationQueueException,
    ProviderException,
    ProviderNotConfiguredException,
)
from loan_manager.domain.interfaces import EmailProvider, NotificationQueue, SmsProvider
from loan_manager.service.notifications import payment_reminder_email, payment_reminder_sms

logger = structlog.get_logger(__name__)


class NotificationService:
    """
    Application service for sending notifications.

    Used both by the HTTP routes and by the queue worker, which
    constructs it without a queue.
    """

    def __init__(
        self,
        email_provider: EmailProvider,
        sms_provider: SmsProvider,
        from_email: str,
        queue: Optional[NotificationQueue] = None,
    ):
        self._email_provider = email_provider
        self._sms_provider = sms_provider
        self._from_email = from_email
        self._queue = queue

    async def send_email(self, message: EmailMessage) -> DeliveryReceipt:
        """
        Send an email immediately.

        The sender falls back to the configured FROM_EMAIL.

        Raises:
            ProviderNotConfiguredException: If SendGrid has no API key
            ProviderException: If SendGrid rejects the message
        """
        resolved = EmailMessage(
            to=message.to,
            subject=message.subject,
            body=message.body,
            html=message.html,
            from_email=message.from_email or self._from_email,
        )

        try:
            receipt = await self._email_provider.send(resolved)
        except ProviderNotConfiguredException:
            record_notification(NotificationChannel.EMAIL.value, sent=False)
            raise
        except ProviderException as e:
            record_notification(NotificationChannel.EMAIL.value, sent=False)
            logger.error("email_send_failed", to=message.to, error=e.message)
            raise ProviderException(
                f"Failed to send email: {e.message}",
                provider=e.provider,
                status_code=e.status_code,
                error_code=e.error_code,
            ) from e

        record_notification(NotificationChannel.EMAIL.value, sent=True)
        logger.info("email_sent", to=message.to, message_id=receipt.message_id)
        return receipt

    async def send_sms(self, message: SmsMessage) -> DeliveryReceipt:
        """
        Send an SMS immediately from the configured Twilio number.

        Raises:
            ProviderNotConfiguredException: If Twilio credentials are missing
            ProviderException: If Twilio rejects the message
        """
        try:
            receipt = await self._sms_provider.send(message)
        except ProviderNotConfiguredException:
            record_notification(NotificationChannel.SMS.value, sent=False)
            raise
        except ProviderException as e:
            record_notification(NotificationChannel.SMS.value, sent=False)
            logger.error("sms_send_failed", to=message.to, error=e.message)
            raise ProviderException(
                f"Failed to send SMS: {e.message}",
                provider=e.provider,
                status_code=e.status_code,
                error_code=e.error_code,
            ) from e

        record_notification(NotificationChannel.SMS.value, sent=True)
        logger.info("sms_sent", to=message.to, message_id=receipt.message_id)
        return receipt

    async def send_payment_reminder(self, request: PaymentReminderRequest) -> List[ReminderDelivery]:
        """
        Send the templated payment reminder on the requested channels.

        SMS is only sent when requested and a phone number is present.
        Channels are attempted in order; the first failure propagates.
        """
        results: List[ReminderDelivery] = []

        if request.send_email:
            content = payment_reminder_email(
                request.borrower_name, request.due_amount, request.due_date
            )
            receipt = await self.send_email(
                EmailMessage(
                    to=request.borrower_email,
                    subject=content.subject,
                    body=content.text,
                    html=content.html,
                )
            )
            results.append(ReminderDelivery(type=NotificationChannel.EMAIL, receipt=receipt))

        if request.send_sms and request.borrower_phone:
            text = payment_reminder_sms(
                request.borrower_name, request.due_amount, request.due_date
            )
            receipt = await self.send_sms(SmsMessage(to=request.borrower_phone, message=text))
            results.append(ReminderDelivery(type=NotificationChannel.SMS, receipt=receipt))

        logger.info(
            "payment_reminder_sent",
            borrower_email=request.borrower_email,
            channels=[r.type.value for r in results],
        )
        return results

    async def queue_email(self, message: EmailMessage) -> NotificationJob:
        """Queue an email for the background worker."""
        job = await self._require_queue().enqueue_email(message)
        logger.info("email_queued", to=message.to, job_id=job.id)
        return job

    async def queue_sms(self, message: SmsMessage) -> NotificationJob:
        job = await self._require_queue().enqueue_sms(message)
        logger.info("sms_queued", to=message.to, job_id=job.id)
        return job

    def _require_queue(self) -> NotificationQueue:
        if self._queue is None:
            raise NotificationQueueException("Notification queue not initialized")
        return self._queue
