"""Payment service request and response schemas."""

from datetime import date, datetime
from typing import Dict, Literal, Optional

from pydantic import Field, model_validator

from loan_manager.domain.entities import PaymentMethod

from .common import CamelModel


class ProcessPaymentSchema(CamelModel):
    """Schema for POST /api/v1/payments/process."""

    borrower_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, examples=[250.0])
    currency: str = "usd"
    payment_method: PaymentMethod
    payment_method_id: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    @model_validator(mode="after")
    def require_method_id_for_gateway(self) -> "ProcessPaymentSchema":
        if not self.payment_method.is_offline and not self.payment_method_id:
            raise ValueError("paymentMethodId is required for card and ach payments")
        return self


class ValidatePaymentSchema(CamelModel):
    """Schema for POST /api/v1/payments/validate."""

    borrower_id: str = Field(..., min_length=1)
    amount: float
    due_amount: float = Field(..., ge=0)
    payment_date: Optional[date] = None


class RefundSchema(CamelModel):
    """Schema for POST /api/v1/payments/refund."""

    payment_id: str = Field(..., min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    reason: Optional[Literal["duplicate", "fraudulent", "requested_by_customer"]] = None


class CreateIntentSchema(CamelModel):
    """Schema for POST /api/v1/payments/create-intent."""

    amount: float = Field(..., gt=0)
    currency: str = "usd"
    borrower_id: str = Field(..., min_length=1)
    metadata: Optional[Dict[str, str]] = None


class PaymentResultSchema(CamelModel):
    success: bool = True
    payment_id: str
    status: str
    amount: float
    method: PaymentMethod
    transaction_id: Optional[str] = None
    processed_at: datetime


class PaymentValidationSchema(CamelModel):
    success: bool = True
    is_valid: bool
    errors: list[str]
    warnings: list[str]


class RefundResultSchema(CamelModel):
    success: bool = True
    refund_id: str
    amount: float
    status: str
    processed_at: datetime


class PaymentIntentSchema(CamelModel):
    success: bool = True
    client_secret: str
    payment_intent_id: str
    amount: float


class PaymentDetailsSchema(CamelModel):
    id: str
    amount: float
    currency: str
    status: str
    metadata: Dict[str, str]
    created: Optional[datetime] = None


class PaymentDetailsResponseSchema(CamelModel):
    success: bool = True
    data: PaymentDetailsSchema


class PaymentHistoryResponseSchema(CamelModel):
    success: bool = True
    message: str = "History feature coming soon"
    borrower_id: str
    data: list = Field(default_factory=list)
