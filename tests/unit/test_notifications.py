"""
Unit Tests for notification templates, job lifecycle and NotificationService.
"""

from datetime import date

import pytest

from loan_manager.application.dto import PaymentReminderRequest
from loan_manager.application.services import NotificationService
from loan_manager.domain.entities import (
    DeliveryReceipt,
    EmailMessage,
    JobKind,
    JobStatus,
    NotificationJob,
    SmsMessage,
)
from loan_manager.domain.exceptions import (
    NotificationQueueException,
    ProviderException,
    ProviderNotConfiguredException,
)
from loan_manager.domain.interfaces import EmailProvider, SmsProvider
from loan_manager.service.notifications import (
    format_date,
    format_usd,
    payment_reminder_email,
    payment_reminder_sms,
)


class RecordingEmailProvider(EmailProvider):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent = []

    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        if self.error:
            raise self.error
        self.sent.append(message)
        return DeliveryReceipt(message_id="msg-1")


class RecordingSmsProvider(SmsProvider):
    def __init__(self):
        self.sent = []

    async def send(self, message: SmsMessage) -> DeliveryReceipt:
        self.sent.append(message)
        return DeliveryReceipt(message_id="SM1")


# =============================================================================
# Template Tests
# =============================================================================

class TestTemplates:

    def test_format_usd(self):
        assert format_usd(1234.5) == "$1,234.50"
        assert format_usd(0) == "$0.00"
        assert format_usd(1000000) == "$1,000,000.00"

    def test_format_usd_rounds_half_up(self):
        assert format_usd(0.125) == "$0.13"
        assert format_usd(2.675) == "$2.68"
        assert format_usd(-0.125) == "-$0.13"

    def test_format_date_has_no_padding(self):
        assert format_date(date(2025, 3, 7)) == "3/7/2025"

    def test_reminder_email(self):
        content = payment_reminder_email("Jane", 1010, date(2025, 1, 31))

        assert content.subject == "Payment Due Reminder for Jane"
        assert "Hello Jane," in content.html
        assert "$1,010.00" in content.html
        assert "1/31/2025" in content.text

    def test_reminder_email_escapes_name_in_html(self):
        content = payment_reminder_email("<b>Eve</b>", 1, date(2025, 1, 1))

        assert "<b>Eve</b>" not in content.html
        assert "&lt;b&gt;Eve&lt;/b&gt;" in content.html

    def test_reminder_sms(self):
        assert payment_reminder_sms("Jane", 50, date(2025, 12, 1)) == (
            "Hi Jane, payment reminder: $50.00 due on 12/1/2025. "
            "Please make payment soon. Thank you!"
        )


# =============================================================================
# Job Lifecycle Tests
# =============================================================================

class TestNotificationJob:

    def test_backoff_doubles(self):
        job = NotificationJob(id="1", kind=JobKind.SEND_EMAIL)

        delays = []
        for attempt in (1, 2, 3):
            job.mark_active(attempt)
            delays.append(job.retry_delay())

        assert delays == [2.0, 4.0, 8.0]

    def test_retries_until_attempts_exhausted(self):
        job = NotificationJob(id="1", kind=JobKind.SEND_SMS, max_attempts=3)

        job.mark_active(1)
        job.mark_failed("boom")
        assert job.status == JobStatus.RETRYING
        assert not job.is_terminal

        job.mark_active(3)
        job.mark_failed("boom")
        assert job.status == JobStatus.FAILED
        assert job.is_terminal
        assert job.last_error == "boom"

    def test_completed(self):
        job = NotificationJob(id="1", kind=JobKind.SEND_EMAIL)
        job.mark_active(2)
        job.mark_failed("x")
        job.mark_completed()

        assert job.status == JobStatus.COMPLETED
        assert job.last_error is None


# =============================================================================
# NotificationService Tests
# =============================================================================

class TestNotificationService:

    @pytest.mark.asyncio
    async def test_sender_falls_back_to_default(self):
        email = RecordingEmailProvider()
        service = NotificationService(email, RecordingSmsProvider(), from_email="noreply@x.com")

        await service.send_email(EmailMessage(to="a@b.com", subject="s", body="b"))

        assert email.sent[0].from_email == "noreply@x.com"

    @pytest.mark.asyncio
    async def test_provider_error_is_prefixed(self):
        email = RecordingEmailProvider(ProviderException("Forbidden", "sendgrid", status_code=403))
        service = NotificationService(email, RecordingSmsProvider(), from_email="n@x.com")

        with pytest.raises(ProviderException) as exc_info:
            await service.send_email(EmailMessage(to="a@b.com", subject="s", body="b"))

        assert exc_info.value.message == "Failed to send email: Forbidden"
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_not_configured_passes_through(self):
        email = RecordingEmailProvider(ProviderNotConfiguredException("SendGrid API key not configured", "sendgrid"))
        service = NotificationService(email, RecordingSmsProvider(), from_email="n@x.com")

        with pytest.raises(ProviderNotConfiguredException):
            await service.send_email(EmailMessage(to="a@b.com", subject="s", body="b"))

    @pytest.mark.asyncio
    async def test_reminder_channels(self):
        email, sms = RecordingEmailProvider(), RecordingSmsProvider()
        service = NotificationService(email, sms, from_email="n@x.com")

        results = await service.send_payment_reminder(
            PaymentReminderRequest(
                borrower_name="Jane",
                borrower_email="jane@example.com",
                borrower_phone="+15551234567",
                due_amount=10,
                due_date=date(2025, 1, 1),
                send_sms=True,
            )
        )

        assert [r.type.value for r in results] == ["email", "sms"]
        assert [r.receipt.message_id for r in results] == ["msg-1", "SM1"]

    @pytest.mark.asyncio
    async def test_queue_required_for_async_sends(self):
        service = NotificationService(RecordingEmailProvider(), RecordingSmsProvider(), from_email="n@x.com")

        with pytest.raises(NotificationQueueException):
            await service.queue_sms(SmsMessage(to="+15551234567", message="hi"))
