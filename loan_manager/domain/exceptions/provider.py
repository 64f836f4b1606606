"""Vendor (SendGrid, Twilio, Stripe) domain exceptions."""

from .base import DomainException


class ProviderException(DomainException):
    """Raised when a vendor API call fails."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        super().__init__(
            message=message,
            code="PROVIDER_ERROR",
        )
        self.provider = provider
        self.status_code = status_code
        self.error_code = error_code


class ProviderNotConfiguredException(DomainException):
    """Raised when a vendor's credentials are missing."""

    def __init__(self, message: str, provider: str):
        super().__init__(
            message=message,
            code="PROVIDER_NOT_CONFIGURED",
        )
        self.provider = provider
