"""Payment-related domain exceptions."""

from .base import DomainException


class PaymentNotFoundException(DomainException):
    """Raised when a payment cannot be found at the gateway."""

    def __init__(self, payment_id: str):
        super().__init__(
            message="Payment not found",
            code="PAYMENT_NOT_FOUND",
        )
        self.payment_id = payment_id


class InvalidPaymentRequestException(DomainException):
    """Raised when a payment request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PAYMENT_REQUEST",
        )
