"""Payment service - card/ACH processing, refunds and offline payments."""

from datetime import datetime
from typing import Dict

import structlog

from loan_manager.application.dto import (
    PaymentDetails,
    PaymentIntentRequest,
    PaymentIntentResult,
    PaymentResult,
    PaymentValidationResult,
    ProcessPaymentRequest,
    RefundRequest,
    RefundResult,
    ValidatePaymentRequest,
)
from loan_manager.core.metrics import record_payment, record_refund
from loan_manager.domain.exceptions import (
    InvalidPaymentRequestException,
    PaymentNotFoundException,
    ProviderException,
    ProviderNotConfiguredException,
)
from loan_manager.domain.interfaces import PaymentGateway
from loan_manager.service.payments import (
    from_minor_units,
    generate_offline_payment_id,
    to_minor_units,
    validate_payment,
)

logger = structlog.get_logger(__name__)

OFFLINE_STATUS = "succeeded"


def _wrap(prefix: str, error: ProviderException) -> ProviderException:
    return ProviderException(
        f"{prefix}: {error.message}",
        provider=error.provider,
        status_code=error.status_code,
        error_code=error.error_code,
    )


class PaymentService:
    """
    Application service for payment use cases.

    Card and ACH go through the gateway; cash and check are recorded
    with a locally generated id and never reach the gateway.
    """

    def __init__(self, gateway: PaymentGateway):
        self._gateway = gateway

    async def process_payment(self, request: ProcessPaymentRequest) -> PaymentResult:
        """
        Process a payment.

        Raises:
            InvalidPaymentRequestException: Card/ACH without a payment method id
            ProviderNotConfiguredException: If Stripe has no secret key
            ProviderException: If Stripe rejects the payment
        """
        log = logger.bind(
            borrower_id=request.borrower_id,
            amount=request.amount,
            method=request.payment_method.value,
        )

        if request.payment_method.is_offline:
            result = PaymentResult(
                payment_id=generate_offline_payment_id(),
                status=OFFLINE_STATUS,
                amount=request.amount,
                method=request.payment_method,
                processed_at=datetime.utcnow(),
            )
            record_payment(request.payment_method.value, succeeded=True)
            log.info("offline_payment_recorded", payment_id=result.payment_id)
            return result

        if not request.payment_method_id:
            raise InvalidPaymentRequestException(
                "paymentMethodId is required for card and ach payments"
            )

        metadata: Dict[str, str] = {**request.metadata, "borrowerId": request.borrower_id}

        try:
            intent = await self._gateway.create_payment_intent(
                amount=to_minor_units(request.amount),
                currency=request.currency,
                metadata=metadata,
                payment_method_id=request.payment_method_id,
                confirm=True,
                description=request.description or f"Payment for borrower {request.borrower_id}",
            )
        except ProviderNotConfiguredException:
            record_payment(request.payment_method.value, succeeded=False)
            raise
        except ProviderException as e:
            record_payment(request.payment_method.value, succeeded=False)
            log.error("payment_failed", error=e.message)
            raise _wrap("Payment processing failed", e) from e

        record_payment(request.payment_method.value, succeeded=intent.status == "succeeded")
        log.info("payment_processed", payment_id=intent.id, status=intent.status)

        return PaymentResult(
            payment_id=intent.id,
            status=intent.status,
            amount=request.amount,
            method=request.payment_method,
            transaction_id=intent.id,
            processed_at=datetime.utcnow(),
        )

    def validate_payment(self, request: ValidatePaymentRequest) -> PaymentValidationResult:
        validation = validate_payment(
            borrower_id=request.borrower_id,
            amount=request.amount,
            due_amount=request.due_amount,
            payment_date=request.payment_date,
        )
        return PaymentValidationResult(
            is_valid=validation.is_valid,
            errors=list(validation.errors),
            warnings=list(validation.warnings),
        )

    async def refund_payment(self, request: RefundRequest) -> RefundResult:
        """
        Refund a gateway payment, fully or partially.

        Raises:
            PaymentNotFoundException: If the payment intent does not exist
            ProviderException: If Stripe rejects the refund
        """
        log = logger.bind(payment_id=request.payment_id, amount=request.amount)

        try:
            intent = await self._gateway.retrieve_payment_intent(request.payment_id)
        except ProviderNotConfiguredException:
            raise
        except ProviderException as e:
            record_refund(succeeded=False)
            raise _wrap("Refund processing failed", e) from e

        if intent is None:
            raise PaymentNotFoundException(request.payment_id)

        amount = to_minor_units(request.amount) if request.amount is not None else None

        try:
            refund = await self._gateway.create_refund(
                payment_intent_id=intent.id,
                amount=amount,
                reason=request.reason,
            )
        except ProviderNotConfiguredException:
            raise
        except ProviderException as e:
            record_refund(succeeded=False)
            log.error("refund_failed", error=e.message)
            raise _wrap("Refund processing failed", e) from e

        record_refund(succeeded=True)
        log.info("refund_processed", refund_id=refund.id, status=refund.status)

        return RefundResult(
            refund_id=refund.id,
            amount=from_minor_units(refund.amount),
            status=refund.status,
            processed_at=datetime.utcnow(),
        )

    async def create_payment_intent(self, request: PaymentIntentRequest) -> PaymentIntentResult:
        """Create an unconfirmed intent for client-side confirmation."""
        metadata: Dict[str, str] = {**request.metadata, "borrowerId": request.borrower_id}

        try:
            intent = await self._gateway.create_payment_intent(
                amount=to_minor_units(request.amount),
                currency=request.currency,
                metadata=metadata,
            )
        except ProviderNotConfiguredException:
            raise
        except ProviderException as e:
            logger.error("payment_intent_failed", borrower_id=request.borrower_id, error=e.message)
            raise _wrap("Failed to create payment intent", e) from e

        logger.info("payment_intent_created", payment_intent_id=intent.id)

        return PaymentIntentResult(
            client_secret=intent.client_secret or "",
            payment_intent_id=intent.id,
            amount=request.amount,
        )

    async def get_payment(self, payment_id: str) -> PaymentDetails:
        """
        Look up a gateway payment.

        Raises:
            PaymentNotFoundException: If Stripe reports it missing
        """
        try:
            intent = await self._gateway.retrieve_payment_intent(payment_id)
        except ProviderNotConfiguredException:
            raise
        except ProviderException as e:
            raise _wrap("Failed to retrieve payment", e) from e

        if intent is None:
            raise PaymentNotFoundException(payment_id)

        return PaymentDetails(
            id=intent.id,
            amount=from_minor_units(intent.amount),
            currency=intent.currency,
            status=intent.status,
            metadata=dict(intent.metadata),
            created=intent.created,
        )
