"""PostgreSQL implementation of BorrowerRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from loan_manager.domain.entities import ApplicationStatus, Borrower
from loan_manager.domain.interfaces import BorrowerRepository
from loan_manager.infrastructure.database.models import BorrowerModel, BorrowerPaymentModel


class PostgresBorrowerRepository(BorrowerRepository):
    """SQLAlchemy-backed borrower repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, borrower: Borrower) -> Borrower:
        if borrower.numeric_id is None:
            result = await self._session.execute(select(func.max(BorrowerModel.numeric_id)))
            borrower.numeric_id = (result.scalar() or 0) + 1

        model = BorrowerModel(
            id=str(borrower.id),
            numeric_id=borrower.numeric_id,
            application_id=str(borrower.application_id),
            sn_no=borrower.sn_no,
            name=borrower.name,
            loan_amount=borrower.loan_amount,
            rate_of_interest=borrower.rate_of_interest,
            start_date=borrower.start_date,
            end_date=borrower.end_date,
            days_between=borrower.days_between,
            total_amount=borrower.total_amount,
            due_date=borrower.due_date,
            status=borrower.status.value,
            created_at=borrower.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return borrower

    async def get_by_id(self, borrower_id: UUID) -> Optional[Borrower]:
        stmt = select(BorrowerModel).where(BorrowerModel.id == str(borrower_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def list(self, name: Optional[str] = None) -> List[Borrower]:
        stmt = select(BorrowerModel).order_by(BorrowerModel.numeric_id.asc())
        if name:
            stmt = stmt.where(BorrowerModel.name.ilike(f"%{name}%"))

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, borrower_id: UUID) -> bool:
        await self._session.execute(
            delete(BorrowerPaymentModel).where(BorrowerPaymentModel.borrower_id == str(borrower_id))
        )
        result = await self._session.execute(
            delete(BorrowerModel).where(BorrowerModel.id == str(borrower_id))
        )
        return result.rowcount > 0

    def _to_entity(self, model: BorrowerModel) -> Borrower:
        return Borrower(
            id=UUID(str(model.id)),
            numeric_id=model.numeric_id,
            application_id=UUID(str(model.application_id)),
            sn_no=model.sn_no,
            name=model.name,
            loan_amount=model.loan_amount,
            rate_of_interest=model.rate_of_interest,
            start_date=model.start_date,
            end_date=model.end_date,
            days_between=model.days_between,
            total_amount=model.total_amount,
            due_date=model.due_date,
            status=ApplicationStatus(model.status),
            created_at=model.created_at,
        )
