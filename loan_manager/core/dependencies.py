"""Dependency injection for FastAPI."""

from typing import Annotated, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loan_manager.application.services import (
    ApplicationService,
    BorrowerService,
    NotificationService,
    PaymentService,
)
from loan_manager.core.config import Settings, get_settings
from loan_manager.domain.interfaces import (
    ApplicationRepository,
    BorrowerRepository,
    EmailProvider,
    NotificationQueue,
    NotificationServiceClient,
    PaymentGateway,
    RepaymentRepository,
    SmsProvider,
)
from loan_manager.infrastructure.clients import (
    HttpNotificationServiceClient,
    SendGridEmailProvider,
    StripePaymentGateway,
    TwilioSmsProvider,
)
from loan_manager.infrastructure.database import get_db_session
from loan_manager.infrastructure.queue import ArqNotificationQueue, queue_manager
from loan_manager.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresBorrowerRepository,
    PostgresRepaymentRepository,
)

SettingsDep = Annotated[Settings, Depends(get_settings)]


# Repository dependencies
async def get_application_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApplicationRepository:
    return PostgresApplicationRepository(session)


async def get_borrower_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> BorrowerRepository:
    return PostgresBorrowerRepository(session)


async def get_repayment_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> RepaymentRepository:
    return PostgresRepaymentRepository(session)


# External client dependencies
def build_email_provider(config: Settings) -> SendGridEmailProvider:
    return SendGridEmailProvider(
        api_key=config.sendgrid_api_key,
        base_url=config.sendgrid_api_url,
        timeout=config.provider_timeout,
    )


def build_sms_provider(config: Settings) -> TwilioSmsProvider:
    return TwilioSmsProvider(
        account_sid=config.twilio_account_sid,
        auth_token=config.twilio_auth_token,
        from_number=config.twilio_phone_number,
        base_url=config.twilio_api_url,
        timeout=config.provider_timeout,
    )


def build_payment_gateway(config: Settings) -> StripePaymentGateway:
    return StripePaymentGateway(
        secret_key=config.stripe_secret_key,
        base_url=config.stripe_api_url,
        api_version=config.stripe_api_version,
        timeout=config.provider_timeout,
    )


def get_email_provider(config: SettingsDep) -> EmailProvider:
    return build_email_provider(config)


def get_sms_provider(config: SettingsDep) -> SmsProvider:
    return build_sms_provider(config)


def get_payment_gateway(config: SettingsDep) -> PaymentGateway:
    return build_payment_gateway(config)


def get_notification_queue(config: SettingsDep) -> Optional[NotificationQueue]:
    """The Redis-backed queue, or None until the pool is up."""
    if not queue_manager.is_initialized:
        return None
    return ArqNotificationQueue(
        pool=queue_manager.pool,
        queue_name=config.notification_queue_name,
        max_attempts=config.notification_job_max_attempts,
        backoff_seconds=config.notification_job_backoff_seconds,
    )


def get_notification_service_client(config: SettingsDep) -> NotificationServiceClient:
    return HttpNotificationServiceClient(
        base_url=config.notification_service_url,
        timeout=config.notification_service_timeout,
    )


# Service dependencies
def get_notification_service(
    config: SettingsDep,
    email_provider: Annotated[EmailProvider, Depends(get_email_provider)],
    sms_provider: Annotated[SmsProvider, Depends(get_sms_provider)],
    queue: Annotated[Optional[NotificationQueue], Depends(get_notification_queue)],
) -> NotificationService:
    return NotificationService(
        email_provider=email_provider,
        sms_provider=sms_provider,
        from_email=config.from_email,
        queue=queue,
    )


def get_payment_service(
    gateway: Annotated[PaymentGateway, Depends(get_payment_gateway)],
) -> PaymentService:
    return PaymentService(gateway=gateway)


async def get_application_service(
    application_repo: Annotated[ApplicationRepository, Depends(get_application_repository)],
    borrower_repo: Annotated[BorrowerRepository, Depends(get_borrower_repository)],
) -> ApplicationService:
    return ApplicationService(
        application_repository=application_repo,
        borrower_repository=borrower_repo,
    )


async def get_borrower_service(
    borrower_repo: Annotated[BorrowerRepository, Depends(get_borrower_repository)],
    repayment_repo: Annotated[RepaymentRepository, Depends(get_repayment_repository)],
    notification_client: Annotated[
        NotificationServiceClient, Depends(get_notification_service_client)
    ],
) -> BorrowerService:
    """Get a BorrowerService instance with all dependencies."""
    return BorrowerService(
        borrower_repository=borrower_repo,
        repayment_repository=repayment_repo,
        notification_client=notification_client,
    )
