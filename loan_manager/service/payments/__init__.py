"""
Payment amount and validation rules.
"""

from .rules import (
    PaymentValidation,
    from_minor_units,
    generate_offline_payment_id,
    to_minor_units,
    validate_payment,
)

__all__ = [
    "PaymentValidation",
    "from_minor_units",
    "generate_offline_payment_id",
    "to_minor_units",
    "validate_payment",
]
