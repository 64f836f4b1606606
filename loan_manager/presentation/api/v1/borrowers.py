"""Borrower, repayment and reminder API endpoints."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from loan_manager.application.services import BorrowerService
from loan_manager.core.dependencies import get_borrower_service
from loan_manager.presentation.schemas import (
    BorrowerListResponseSchema,
    BorrowerResponseSchema,
    BorrowerSchema,
    DeletedResponseSchema,
    ErrorResponseSchema,
    ReminderRequestSchema,
    ReminderResponseSchema,
    RepaymentCreateSchema,
    RepaymentListResponseSchema,
    RepaymentResponseSchema,
    RepaymentSchema,
)

borrower_router = APIRouter(
    prefix="/api/v1/borrowers",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Borrower not found"},
    },
)

BorrowerServiceDep = Annotated[BorrowerService, Depends(get_borrower_service)]


@borrower_router.get("", response_model=BorrowerListResponseSchema, summary="List Borrowers")
async def list_borrowers(
    service: BorrowerServiceDep,
    name: Annotated[
        Optional[str],
        Query(max_length=255, description="Case-insensitive name filter"),
    ] = None,
) -> BorrowerListResponseSchema:
    """List borrowers with amounts paid and still due."""
    summaries = await service.list_borrowers(name=name)
    return BorrowerListResponseSchema(data=[BorrowerSchema.from_summary(s) for s in summaries])


@borrower_router.get("/{borrower_id}", response_model=BorrowerResponseSchema, summary="Get Borrower")
async def get_borrower(
    borrower_id: UUID,
    service: BorrowerServiceDep,
) -> BorrowerResponseSchema:
    summary = await service.get_borrower(borrower_id)
    return BorrowerResponseSchema(data=BorrowerSchema.from_summary(summary))


@borrower_router.delete("/{borrower_id}", response_model=DeletedResponseSchema, summary="Delete Borrower")
async def delete_borrower(
    borrower_id: UUID,
    service: BorrowerServiceDep,
) -> DeletedResponseSchema:
    await service.delete_borrower(borrower_id)
    return DeletedResponseSchema()


@borrower_router.post(
    "/{borrower_id}/payments",
    response_model=RepaymentResponseSchema,
    status_code=201,
    summary="Record Repayment",
)
async def record_payment(
    borrower_id: UUID,
    request: RepaymentCreateSchema,
    service: BorrowerServiceDep,
) -> RepaymentResponseSchema:
    payment = await service.record_payment(borrower_id, request.amount, request.paid_on)
    return RepaymentResponseSchema(data=RepaymentSchema.from_entity(payment))


@borrower_router.get(
    "/{borrower_id}/payments",
    response_model=RepaymentListResponseSchema,
    summary="List Repayments",
)
async def list_payments(
    borrower_id: UUID,
    service: BorrowerServiceDep,
) -> RepaymentListResponseSchema:
    payments = await service.list_payments(borrower_id)
    return RepaymentListResponseSchema(data=[RepaymentSchema.from_entity(p) for p in payments])


@borrower_router.post(
    "/{borrower_id}/reminders",
    response_model=ReminderResponseSchema,
    summary="Send Payment Reminder",
    description="""
    Remind the borrower of the current amount due through the
    notification service.
    """,
    responses={500: {"model": ErrorResponseSchema, "description": "Notification service failure"}},
)
async def send_reminder(
    borrower_id: UUID,
    request: ReminderRequestSchema,
    service: BorrowerServiceDep,
) -> ReminderResponseSchema:
    result = await service.send_reminder(
        borrower_id,
        borrower_email=str(request.borrower_email),
        borrower_phone=request.borrower_phone,
        send_sms=request.send_sms,
    )
    return ReminderResponseSchema(results=result.get("results", []))
