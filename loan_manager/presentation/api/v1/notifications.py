"""Notification API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from loan_manager.application.dto import PaymentReminderRequest
from loan_manager.application.services import NotificationService
from loan_manager.core.dependencies import get_notification_service
from loan_manager.domain.entities import DeliveryReceipt, EmailMessage, SmsMessage
from loan_manager.presentation.schemas import (
    ErrorResponseSchema,
    HistoryResponseSchema,
    NotificationQueuedSchema,
    NotificationSentSchema,
    PaymentReminderResponseSchema,
    PaymentReminderSchema,
    ReminderResultSchema,
    SendEmailSchema,
    SendSmsSchema,
)

notification_router = APIRouter(
    prefix="/api/v1/notifications",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        500: {"model": ErrorResponseSchema, "description": "Provider or queue failure"},
    },
)

NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def _sent(receipt: DeliveryReceipt) -> NotificationSentSchema:
    data = receipt.to_dict()
    return NotificationSentSchema(message_id=data["message_id"], sent_at=data["sent_at"])


def _email(request: SendEmailSchema) -> EmailMessage:
    return EmailMessage(
        to=str(request.to),
        subject=request.subject,
        body=request.body,
        html=request.html,
        from_email=str(request.from_email) if request.from_email else None,
    )


@notification_router.post(
    "/email",
    response_model=NotificationSentSchema,
    summary="Send Email",
)
async def send_email(
    request: SendEmailSchema,
    service: NotificationServiceDep,
) -> NotificationSentSchema:
    """Send an email through SendGrid and wait for the provider's answer."""
    receipt = await service.send_email(_email(request))
    return _sent(receipt)


@notification_router.post(
    "/email/async",
    response_model=NotificationQueuedSchema,
    summary="Queue Email",
)
async def queue_email(
    request: SendEmailSchema,
    service: NotificationServiceDep,
) -> NotificationQueuedSchema:
    """Queue an email; delivery happens in the worker with retries."""
    job = await service.queue_email(_email(request))
    return NotificationQueuedSchema(job_id=job.id)


@notification_router.post("/sms", response_model=NotificationSentSchema, summary="Send SMS")
async def send_sms(
    request: SendSmsSchema,
    service: NotificationServiceDep,
) -> NotificationSentSchema:
    receipt = await service.send_sms(SmsMessage(to=request.to, message=request.message))
    return _sent(receipt)


@notification_router.post("/sms/async", response_model=NotificationQueuedSchema, summary="Queue SMS")
async def queue_sms(
    request: SendSmsSchema,
    service: NotificationServiceDep,
) -> NotificationQueuedSchema:
    job = await service.queue_sms(SmsMessage(to=request.to, message=request.message))
    return NotificationQueuedSchema(job_id=job.id)


@notification_router.post(
    "/payment-reminder",
    response_model=PaymentReminderResponseSchema,
    summary="Send Payment Reminder",
    description="""
    Send the templated payment reminder by email and, when requested
    and a phone number is given, by SMS.
    """,
)
async def send_payment_reminder(
    request: PaymentReminderSchema,
    service: NotificationServiceDep,
) -> PaymentReminderResponseSchema:
    deliveries = await service.send_payment_reminder(
        PaymentReminderRequest(
            borrower_name=request.borrower_name,
            borrower_email=str(request.borrower_email),
            borrower_phone=request.borrower_phone,
            due_amount=request.due_amount,
            due_date=request.due_date,
            send_email=request.send_email,
            send_sms=request.send_sms,
        )
    )

    return PaymentReminderResponseSchema(
        results=[
            ReminderResultSchema(
                type=d.type.value,
                message_id=d.receipt.message_id,
                sent_at=d.receipt.to_dict()["sent_at"],
            )
            for d in deliveries
        ]
    )


@notification_router.get("/history", response_model=HistoryResponseSchema, summary="Notification History")
async def notification_history() -> HistoryResponseSchema:
    return HistoryResponseSchema()
