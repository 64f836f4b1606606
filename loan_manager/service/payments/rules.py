"""
Payment amount conversion and pre-flight validation rules.
"""

import secrets
import string
import time
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

OVERPAYMENT_TOLERANCE = Decimal("1.1")
OFFLINE_ID_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class PaymentValidation:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount (dollars) to minor units (cents)."""
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> float:
    return amount / 100


def generate_offline_payment_id(now_ms: Optional[int] = None) -> str:
    """Local identifier for cash/check payments: offline_<epoch ms>_<9 chars>."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(OFFLINE_ID_ALPHABET) for _ in range(9))
    return f"offline_{now_ms}_{suffix}"


def validate_payment(
    borrower_id: str,
    amount: float,
    due_amount: float,
    payment_date: Optional[date] = None,
    today: Optional[date] = None,
) -> PaymentValidation:
    """
    Check a proposed payment against the amount due.

    Errors make the payment invalid; warnings are advisory.
    """
    errors: List[str] = []
    warnings: List[str] = []

    if amount <= 0:
        errors.append("Payment amount must be greater than zero")

    if Decimal(str(amount)) > Decimal(str(due_amount)) * OVERPAYMENT_TOLERANCE:
        warnings.append("Payment amount exceeds due amount by more than 10%")

    if payment_date is not None:
        if payment_date > (today or date.today()):
            warnings.append("Payment date is in the future")

    if not borrower_id or not borrower_id.strip():
        errors.append("Borrower ID is required")

    return PaymentValidation(errors=errors, warnings=warnings)
