"""
Fixtures for integration tests.

Provides:
- Test clients for the lending, notification and payment apps
- In-memory email/SMS providers, payment gateway and notification queue
- A stub notification service client for the lending API
- In-memory database for testing
"""

from datetime import date, datetime, timezone
from typing import AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from loan_manager.core.dependencies import (
    get_application_repository,
    get_borrower_repository,
    get_email_provider,
    get_notification_queue,
    get_notification_service_client,
    get_payment_gateway,
    get_repayment_repository,
    get_sms_provider,
)
from loan_manager.domain.entities import (
    DeliveryReceipt,
    EmailMessage,
    JobKind,
    NotificationJob,
    PaymentIntent,
    Refund,
    SmsMessage,
)
from loan_manager.domain.exceptions import (
    NotificationDeliveryException,
    NotificationQueueException,
    ProviderException,
    ProviderNotConfiguredException,
)
from loan_manager.domain.interfaces import (
    EmailProvider,
    NotificationQueue,
    NotificationServiceClient,
    PaymentGateway,
    SmsProvider,
)
from loan_manager.infrastructure.database import Base
from loan_manager.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresBorrowerRepository,
    PostgresRepaymentRepository,
)
from loan_manager.main import app, notification_app, payment_app


# =============================================================================
# Mock Providers
# =============================================================================

class MockEmailProvider(EmailProvider):
    """Records emails instead of calling SendGrid."""

    def __init__(self, fail_mode: bool = False, configured: bool = True):
        self.fail_mode = fail_mode
        self.configured = configured
        self.sent: List[EmailMessage] = []

    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        if not self.configured:
            raise ProviderNotConfiguredException("SendGrid API key not configured", "sendgrid")
        if self.fail_mode:
            raise ProviderException("Bad Request", "sendgrid", status_code=400)

        self.sent.append(message)
        return DeliveryReceipt(message_id=f"sg-{len(self.sent)}")


class MockSmsProvider(SmsProvider):
    """Records SMS messages instead of calling Twilio."""

    def __init__(self, fail_mode: bool = False, configured: bool = True):
        self.fail_mode = fail_mode
        self.configured = configured
        self.sent: List[SmsMessage] = []

    async def send(self, message: SmsMessage) -> DeliveryReceipt:
        if not self.configured:
            raise ProviderNotConfiguredException("Twilio not configured", "twilio")
        if self.fail_mode:
            raise ProviderException("Invalid 'To' Phone Number", "twilio", status_code=400)

        self.sent.append(message)
        return DeliveryReceipt(message_id=f"SM{len(self.sent):032d}")


class MockPaymentGateway(PaymentGateway):
    """In-memory stand-in for Stripe PaymentIntents and Refunds."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.intents: Dict[str, PaymentIntent] = {}
        self.refunds: List[Refund] = []
        self.call_count = 0

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: Dict[str, str],
        payment_method_id: Optional[str] = None,
        confirm: bool = False,
        description: Optional[str] = None,
    ) -> PaymentIntent:
        self.call_count += 1
        if self.fail_mode:
            raise ProviderException("Your card was declined.", "stripe", 402, "card_declined")

        intent_id = f"pi_test_{len(self.intents) + 1}"
        intent = PaymentIntent(
            id=intent_id,
            amount=amount,
            currency=currency,
            status="succeeded" if confirm else "requires_payment_method",
            client_secret=f"{intent_id}_secret_abc",
            metadata=dict(metadata),
            created=datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc),
        )
        self.intents[intent_id] = intent
        return intent

    async def retrieve_payment_intent(self, payment_intent_id: str) -> Optional[PaymentIntent]:
        self.call_count += 1
        return self.intents.get(payment_intent_id)

    async def create_refund(
        self,
        payment_intent_id: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> Refund:
        self.call_count += 1
        if self.fail_mode:
            raise ProviderException("Charge has already been refunded.", "stripe", 400)

        intent = self.intents[payment_intent_id]
        refund = Refund(
            id=f"re_test_{len(self.refunds) + 1}",
            amount=amount if amount is not None else intent.amount,
            status="succeeded",
            payment_intent_id=payment_intent_id,
        )
        self.refunds.append(refund)
        return refund


class MockNotificationQueue(NotificationQueue):
    """Collects queued jobs without Redis."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.jobs: List[tuple] = []

    async def enqueue_email(self, message: EmailMessage) -> NotificationJob:
        return self._enqueue(JobKind.SEND_EMAIL, message)

    async def enqueue_sms(self, message: SmsMessage) -> NotificationJob:
        return self._enqueue(JobKind.SEND_SMS, message)

    def _enqueue(self, kind: JobKind, message) -> NotificationJob:
        if self.fail_mode:
            raise NotificationQueueException("Failed to queue notification: Connection refused")
        job = NotificationJob(id=f"job-{len(self.jobs) + 1}", kind=kind)
        self.jobs.append((job, message))
        return job


class MockNotificationServiceClient(NotificationServiceClient):
    """Records calls the lending API makes to the notification service."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.emails: List[dict] = []
        self.reminders: List[dict] = []

    async def send_email(self, to: str, subject: str, body: str) -> dict:
        if self.fail_mode:
            raise NotificationDeliveryException("Failed to send email: Bad Request", 500)
        self.emails.append({"to": to, "subject": subject, "body": body})
        return {"success": True, "messageId": f"sg-{len(self.emails)}"}

    async def send_payment_reminder(
        self,
        borrower_name: str,
        borrower_email: str,
        due_amount: float,
        due_date: date,
        borrower_phone: Optional[str] = None,
        send_email: bool = True,
        send_sms: bool = False,
    ) -> dict:
        if self.fail_mode:
            raise NotificationDeliveryException("Twilio not configured", 500)

        self.reminders.append(
            {
                "borrower_name": borrower_name,
                "borrower_email": borrower_email,
                "due_amount": due_amount,
                "due_date": due_date,
                "borrower_phone": borrower_phone,
                "send_sms": send_sms,
            }
        )
        results = [{"type": "email", "messageId": "sg-1", "sentAt": "2025-01-15T12:00:00Z"}]
        if send_sms and borrower_phone:
            results.append({"type": "sms", "messageId": "SM1", "sentAt": "2025-01-15T12:00:00Z"})
        return {"success": True, "results": results}


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def email_provider() -> MockEmailProvider:
    return MockEmailProvider()


@pytest.fixture
def sms_provider() -> MockSmsProvider:
    return MockSmsProvider()


@pytest.fixture
def notification_queue() -> MockNotificationQueue:
    return MockNotificationQueue()


@pytest.fixture
def payment_gateway() -> MockPaymentGateway:
    return MockPaymentGateway()


@pytest.fixture
def notification_service_client() -> MockNotificationServiceClient:
    return MockNotificationServiceClient()


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def notification_client(
    email_provider: MockEmailProvider,
    sms_provider: MockSmsProvider,
    notification_queue: MockNotificationQueue,
) -> AsyncGenerator[AsyncClient, None]:
    """Notification service with in-memory providers and queue."""
    notification_app.dependency_overrides[get_email_provider] = lambda: email_provider
    notification_app.dependency_overrides[get_sms_provider] = lambda: sms_provider
    notification_app.dependency_overrides[get_notification_queue] = lambda: notification_queue

    transport = ASGITransport(app=notification_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    notification_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def payment_client(
    payment_gateway: MockPaymentGateway,
) -> AsyncGenerator[AsyncClient, None]:
    """Payment service backed by the in-memory gateway."""
    payment_app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    transport = ASGITransport(app=payment_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    payment_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    notification_service_client: MockNotificationServiceClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Lending API client.

    This client:
    - Uses an in-memory SQLite database
    - Replaces the notification service with a recording stub
    """
    async def override_get_application_repository():
        return PostgresApplicationRepository(test_session)

    async def override_get_borrower_repository():
        return PostgresBorrowerRepository(test_session)

    async def override_get_repayment_repository():
        return PostgresRepaymentRepository(test_session)

    app.dependency_overrides[get_application_repository] = override_get_application_repository
    app.dependency_overrides[get_borrower_repository] = override_get_borrower_repository
    app.dependency_overrides[get_repayment_repository] = override_get_repayment_repository
    app.dependency_overrides[get_notification_service_client] = lambda: notification_service_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def application_request() -> dict:
    """1000 at 1% per 30 days over 30 days."""
    return {
        "name": "Jane Doe",
        "loanAmount": 1000,
        "rateOfInterest": 1,
        "startDate": "2025-01-01",
        "endDate": "2025-01-31",
    }


@pytest.fixture
def email_request() -> dict:
    return {
        "to": "borrower@example.com",
        "subject": "Hello",
        "body": "Line one\nLine two",
    }


@pytest_asyncio.fixture
async def borrower_id(client: AsyncClient, application_request: dict) -> str:
    """Id of a borrower created by approving a fresh application."""
    created = await client.post("/api/v1/applications", json=application_request)
    application_id = created.json()["data"]["id"]

    approved = await client.post(f"/api/v1/applications/{application_id}/approve")
    return approved.json()["borrower"]["id"]
