"""Borrower service - active loans, repayments and reminders."""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog

from loan_manager.application.dto import BorrowerSummary
from loan_manager.domain.entities import Borrower, BorrowerPayment
from loan_manager.domain.exceptions import (
    BorrowerNotFoundException,
    InvalidApplicationException,
    NothingDueException,
)
from loan_manager.domain.interfaces import (
    BorrowerRepository,
    NotificationServiceClient,
    RepaymentRepository,
)
from loan_manager.service.lending import due_amount, to_money, total_paid

logger = structlog.get_logger(__name__)


class BorrowerService:
    """Application service for borrowers and their repayments."""

    def __init__(
        self,
        borrower_repository: BorrowerRepository,
        repayment_repository: RepaymentRepository,
        notification_client: NotificationServiceClient,
    ):
        self._borrower_repo = borrower_repository
        self._repayment_repo = repayment_repository
        self._notification_client = notification_client

    async def list_borrowers(self, name: Optional[str] = None) -> List[BorrowerSummary]:
        borrowers = await self._borrower_repo.list(name=name)
        totals = await self._repayment_repo.totals_by_borrower()
        return [
            self._summarize(b, totals.get(b.id, Decimal("0")))
            for b in borrowers
        ]

    async def get_borrower(self, borrower_id: UUID) -> BorrowerSummary:
        """
        Raises:
            BorrowerNotFoundException: If no borrower has this id
        """
        borrower = await self._require_borrower(borrower_id)
        payments = await self._repayment_repo.list_by_borrower(borrower_id)
        return self._summarize(borrower, total_paid(p.amount for p in payments))

    async def delete_borrower(self, borrower_id: UUID) -> None:
        """Delete a borrower together with its repayments."""
        deleted = await self._borrower_repo.delete(borrower_id)
        if not deleted:
            raise BorrowerNotFoundException(str(borrower_id))
        logger.info("borrower_deleted", borrower_id=str(borrower_id))

    async def record_payment(
        self,
        borrower_id: UUID,
        amount: Decimal,
        paid_on: Optional[date] = None,
    ) -> BorrowerPayment:
        """
        Record a repayment; paid_on defaults to today.

        Raises:
            BorrowerNotFoundException: If no borrower has this id
            InvalidApplicationException: If the amount is not positive
        """
        await self._require_borrower(borrower_id)

        if amount <= 0:
            raise InvalidApplicationException("amount must be positive")

        payment = BorrowerPayment(
            borrower_id=borrower_id,
            amount=to_money(amount),
            paid_on=paid_on or date.today(),
        )
        saved = await self._repayment_repo.save(payment)
        logger.info(
            "repayment_recorded",
            borrower_id=str(borrower_id),
            amount=str(saved.amount),
            paid_on=saved.paid_on.isoformat(),
        )
        return saved

    async def list_payments(self, borrower_id: UUID) -> List[BorrowerPayment]:
        await self._require_borrower(borrower_id)
        return await self._repayment_repo.list_by_borrower(borrower_id)

    async def send_reminder(
        self,
        borrower_id: UUID,
        borrower_email: str,
        borrower_phone: Optional[str] = None,
        send_sms: bool = False,
    ) -> Dict[str, Any]:
        """
        Ask the notification service to remind a borrower of the amount due.

        Raises:
            BorrowerNotFoundException: If no borrower has this id
            NothingDueException: If the borrower has paid in full
            NotificationDeliveryException: If the notification service fails
        """
        summary = await self.get_borrower(borrower_id)
        if summary.due_amount <= 0:
            raise NothingDueException(str(borrower_id))

        result = await self._notification_client.send_payment_reminder(
            borrower_name=summary.borrower.name,
            borrower_email=borrower_email,
            due_amount=float(summary.due_amount),
            due_date=summary.borrower.due_date,
            borrower_phone=borrower_phone,
            send_email=True,
            send_sms=send_sms,
        )
        logger.info(
            "reminder_requested",
            borrower_id=str(borrower_id),
            due_amount=str(summary.due_amount),
        )
        return result

    async def _require_borrower(self, borrower_id: UUID) -> Borrower:
        borrower = await self._borrower_repo.get_by_id(borrower_id)
        if borrower is None:
            raise BorrowerNotFoundException(str(borrower_id))
        return borrower

    @staticmethod
    def _summarize(borrower: Borrower, paid: Decimal) -> BorrowerSummary:
        paid = to_money(paid)
        return BorrowerSummary(
            borrower=borrower,
            total_paid=paid,
            due_amount=due_amount(borrower.total_amount, paid),
        )
