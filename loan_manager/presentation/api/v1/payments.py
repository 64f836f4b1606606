"""Payment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from loan_manager.application.dto import (
    PaymentIntentRequest,
    ProcessPaymentRequest,
    RefundRequest,
    ValidatePaymentRequest,
)
from loan_manager.application.services import PaymentService
from loan_manager.core.dependencies import get_payment_service
from loan_manager.presentation.schemas import (
    CreateIntentSchema,
    ErrorResponseSchema,
    PaymentDetailsResponseSchema,
    PaymentDetailsSchema,
    PaymentHistoryResponseSchema,
    PaymentIntentSchema,
    PaymentResultSchema,
    PaymentValidationSchema,
    ProcessPaymentSchema,
    RefundResultSchema,
    RefundSchema,
    ValidatePaymentSchema,
)

payment_router = APIRouter(
    prefix="/api/v1/payments",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        500: {"model": ErrorResponseSchema, "description": "Payment processor failure"},
    },
)

PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]


@payment_router.post(
    "/process",
    response_model=PaymentResultSchema,
    summary="Process Payment",
    description="""
    Charge a card or bank account through Stripe, or record a cash or
    check payment locally.
    """,
)
async def process_payment(
    request: ProcessPaymentSchema,
    service: PaymentServiceDep,
) -> PaymentResultSchema:
    result = await service.process_payment(
        ProcessPaymentRequest(
            borrower_id=request.borrower_id,
            amount=request.amount,
            currency=request.currency,
            payment_method=request.payment_method,
            payment_method_id=request.payment_method_id,
            description=request.description,
            metadata=request.metadata or {},
        )
    )

    return PaymentResultSchema(
        payment_id=result.payment_id,
        status=result.status,
        amount=result.amount,
        method=result.method,
        transaction_id=result.transaction_id,
        processed_at=result.processed_at,
    )


@payment_router.post("/validate", response_model=PaymentValidationSchema, summary="Validate Payment")
async def validate_payment(
    request: ValidatePaymentSchema,
    service: PaymentServiceDep,
) -> PaymentValidationSchema:
    """Check a proposed payment without charging anything."""
    result = service.validate_payment(
        ValidatePaymentRequest(
            borrower_id=request.borrower_id,
            amount=request.amount,
            due_amount=request.due_amount,
            payment_date=request.payment_date,
        )
    )
    return PaymentValidationSchema(
        is_valid=result.is_valid,
        errors=result.errors,
        warnings=result.warnings,
    )


@payment_router.post("/refund", response_model=RefundResultSchema, summary="Refund Payment")
async def refund_payment(
    request: RefundSchema,
    service: PaymentServiceDep,
) -> RefundResultSchema:
    result = await service.refund_payment(
        RefundRequest(
            payment_id=request.payment_id,
            amount=request.amount,
            reason=request.reason,
        )
    )
    return RefundResultSchema(
        refund_id=result.refund_id,
        amount=result.amount,
        status=result.status,
        processed_at=result.processed_at,
    )


@payment_router.post("/create-intent", response_model=PaymentIntentSchema, summary="Create Payment Intent")
async def create_payment_intent(
    request: CreateIntentSchema,
    service: PaymentServiceDep,
) -> PaymentIntentSchema:
    result = await service.create_payment_intent(
        PaymentIntentRequest(
            borrower_id=request.borrower_id,
            amount=request.amount,
            currency=request.currency,
            metadata=request.metadata or {},
        )
    )
    return PaymentIntentSchema(
        client_secret=result.client_secret,
        payment_intent_id=result.payment_intent_id,
        amount=result.amount,
    )


@payment_router.get(
    "/history/{borrower_id}",
    response_model=PaymentHistoryResponseSchema,
    summary="Payment History",
)
async def payment_history(borrower_id: str) -> PaymentHistoryResponseSchema:
    return PaymentHistoryResponseSchema(borrower_id=borrower_id)


@payment_router.get(
    "/{payment_id}",
    response_model=PaymentDetailsResponseSchema,
    summary="Get Payment",
    responses={404: {"model": ErrorResponseSchema, "description": "Payment not found"}},
)
async def get_payment(
    payment_id: str,
    service: PaymentServiceDep,
) -> PaymentDetailsResponseSchema:
    details = await service.get_payment(payment_id)
    return PaymentDetailsResponseSchema(
        data=PaymentDetailsSchema(
            id=details.id,
            amount=details.amount,
            currency=details.currency,
            status=details.status,
            metadata=details.metadata,
            created=details.created,
        )
    )
