"""Payment gateway entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class PaymentMethod(str, Enum):
    CARD = "card"
    ACH = "ach"
    CASH = "cash"
    CHECK = "check"

    @property
    def is_offline(self) -> bool:
        return self in (PaymentMethod.CASH, PaymentMethod.CHECK)


@dataclass(frozen=True)
class PaymentIntent:
    """A gateway payment intent; amounts are in minor units (cents)."""

    id: str
    amount: int
    currency: str
    status: str
    client_secret: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)
    created: Optional[datetime] = None


@dataclass(frozen=True)
class Refund:
    id: str
    amount: int
    status: str
    payment_intent_id: Optional[str] = None
