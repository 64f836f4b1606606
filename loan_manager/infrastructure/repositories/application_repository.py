"""PostgreSQL implementation of ApplicationRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from loan_manager.domain.entities import ApplicationStatus, LoanApplication
from loan_manager.domain.interfaces import ApplicationRepository
from loan_manager.infrastructure.database.models import LoanApplicationModel


class PostgresApplicationRepository(ApplicationRepository):
    """
    SQLAlchemy-backed application repository.

    Display numbers are assigned as max(sn_no) + 1 at insert time, so
    concurrent inserts may receive the same number.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, application: LoanApplication) -> LoanApplication:
        if application.sn_no is None:
            application.sn_no = await self._next_sn_no()

        model = LoanApplicationModel(id=str(application.id))
        self._apply(model, application)
        model.created_at = application.created_at

        self._session.add(model)
        await self._session.flush()

        return application

    async def update(self, application: LoanApplication) -> LoanApplication:
        model = await self._get_model(application.id)
        if model is None:
            raise ValueError(f"Application {application.id} not found")

        self._apply(model, application)
        await self._session.flush()

        return application

    async def get_by_id(self, application_id: UUID) -> Optional[LoanApplication]:
        model = await self._get_model(application_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def list(self, name: Optional[str] = None) -> List[LoanApplication]:
        stmt = select(LoanApplicationModel).order_by(LoanApplicationModel.sn_no.asc())
        if name:
            stmt = stmt.where(LoanApplicationModel.name.ilike(f"%{name}%"))

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, application_id: UUID) -> bool:
        stmt = delete(LoanApplicationModel).where(
            LoanApplicationModel.id == str(application_id)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def _next_sn_no(self) -> int:
        result = await self._session.execute(select(func.max(LoanApplicationModel.sn_no)))
        return (result.scalar() or 0) + 1

    async def _get_model(self, application_id: UUID) -> Optional[LoanApplicationModel]:
        stmt = select(LoanApplicationModel).where(
            LoanApplicationModel.id == str(application_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply(model: LoanApplicationModel, application: LoanApplication) -> None:
        model.sn_no = application.sn_no
        model.name = application.name
        model.loan_amount = application.loan_amount
        model.rate_of_interest = application.rate_of_interest
        model.start_date = application.start_date
        model.end_date = application.end_date
        model.days_between = application.days_between
        model.total_amount = application.total_amount
        model.status = application.status.value
        model.updated_at = application.updated_at

    def _to_entity(self, model: LoanApplicationModel) -> LoanApplication:
        return LoanApplication(
            id=UUID(str(model.id)),
            sn_no=model.sn_no,
            name=model.name,
            loan_amount=model.loan_amount,
            rate_of_interest=model.rate_of_interest,
            start_date=model.start_date,
            end_date=model.end_date,
            days_between=model.days_between,
            total_amount=model.total_amount,
            status=ApplicationStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
