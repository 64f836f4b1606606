"""Data transfer objects for payment gateway operations."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional

from loan_manager.domain.entities import PaymentMethod


@dataclass(frozen=True)
class ProcessPaymentRequest:
    borrower_id: str
    amount: float
    payment_method: PaymentMethod
    currency: str = "usd"
    payment_method_id: Optional[str] = None
    description: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentResult:
    payment_id: str
    status: str
    amount: float
    method: PaymentMethod
    processed_at: datetime
    transaction_id: Optional[str] = None


@dataclass(frozen=True)
class ValidatePaymentRequest:
    borrower_id: str
    amount: float
    due_amount: float
    payment_date: Optional[date] = None


@dataclass(frozen=True)
class PaymentValidationResult:
    is_valid: bool
    errors: List[str]
    warnings: List[str]


@dataclass(frozen=True)
class RefundRequest:
    payment_id: str
    amount: Optional[float] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class RefundResult:
    refund_id: str
    amount: float
    status: str
    processed_at: datetime


@dataclass(frozen=True)
class PaymentIntentRequest:
    borrower_id: str
    amount: float
    currency: str = "usd"
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentIntentResult:
    client_secret: str
    payment_intent_id: str
    amount: float


@dataclass(frozen=True)
class PaymentDetails:
    """A gateway payment as reported to callers (major units)."""

    id: str
    amount: float
    currency: str
    status: str
    metadata: Dict[str, str]
    created: Optional[datetime]
