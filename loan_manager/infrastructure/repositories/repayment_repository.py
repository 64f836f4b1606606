"""PostgreSQL implementation of RepaymentRepository."""

from decimal import Decimal
from typing import Dict, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from loan_manager.domain.entities import BorrowerPayment
from loan_manager.domain.interfaces import RepaymentRepository
from loan_manager.infrastructure.database.models import BorrowerPaymentModel


class PostgresRepaymentRepository(RepaymentRepository):
    """SQLAlchemy-backed repository for borrower repayments."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, payment: BorrowerPayment) -> BorrowerPayment:
        model = BorrowerPaymentModel(
            id=str(payment.id),
            borrower_id=str(payment.borrower_id),
            amount=payment.amount,
            paid_on=payment.paid_on,
            created_at=payment.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return payment

    async def list_by_borrower(self, borrower_id: UUID) -> List[BorrowerPayment]:
        stmt = (
            select(BorrowerPaymentModel)
            .where(BorrowerPaymentModel.borrower_id == str(borrower_id))
            .order_by(BorrowerPaymentModel.paid_on.asc(), BorrowerPaymentModel.created_at.asc())
        )
        result = await self._session.execute(stmt)

        return [
            BorrowerPayment(
                id=UUID(str(model.id)),
                borrower_id=UUID(str(model.borrower_id)),
                amount=model.amount,
                paid_on=model.paid_on,
                created_at=model.created_at,
            )
            for model in result.scalars().all()
        ]

    async def totals_by_borrower(self) -> Dict[UUID, Decimal]:
        stmt = select(
            BorrowerPaymentModel.borrower_id,
            func.sum(BorrowerPaymentModel.amount),
        ).group_by(BorrowerPaymentModel.borrower_id)
        result = await self._session.execute(stmt)

        return {
            UUID(str(borrower_id)): Decimal(str(total or 0))
            for borrower_id, total in result.all()
        }
