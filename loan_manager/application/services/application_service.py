"""Application service - loan application CRUD and approval workflow."""

from dataclasses import replace
from datetime import datetime
from typing import List, Optional
from uuid import UUID

import structlog

from loan_manager.application.dto import ApplicationInput, ApplicationUpdate
from loan_manager.core.metrics import record_application_transition
from loan_manager.domain.entities import ApplicationStatus, LoanApplication
from loan_manager.domain.exceptions import (
    ApplicationNotEditableException,
    ApplicationNotFoundException,
    InvalidApplicationException,
)
from loan_manager.domain.interfaces import ApplicationRepository, BorrowerRepository
from loan_manager.service.lending import (
    StatusTransition,
    apply_status_transition,
    calculate_loan_terms,
    to_money,
    to_rate,
)

logger = structlog.get_logger(__name__)


class ApplicationService:
    """
    Application service for loan applications.

    Derived fields (days_between, total_amount) are always computed
    here, never taken from the caller.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        borrower_repository: BorrowerRepository,
    ):
        self._application_repo = application_repository
        self._borrower_repo = borrower_repository

    async def create_application(self, data: ApplicationInput) -> LoanApplication:
        """
        Create a Pending application.

        Raises:
            InvalidApplicationException: If the fields fail validation
        """
        errors = data.validate()
        if errors:
            raise InvalidApplicationException("; ".join(errors))

        rate = to_rate(data.rate_of_interest)
        terms = calculate_loan_terms(data.loan_amount, rate, data.start_date, data.end_date)
        application = LoanApplication(
            name=data.name.strip(),
            loan_amount=to_money(data.loan_amount),
            rate_of_interest=rate,
            start_date=data.start_date,
            end_date=data.end_date,
            days_between=terms.days_between,
            total_amount=terms.total_amount,
        )

        saved = await self._application_repo.save(application)
        logger.info(
            "application_created",
            application_id=str(saved.id),
            sn_no=saved.sn_no,
            total_amount=str(saved.total_amount),
        )
        return saved

    async def list_applications(self, name: Optional[str] = None) -> List[LoanApplication]:
        return await self._application_repo.list(name=name)

    async def get_application(self, application_id: UUID) -> LoanApplication:
        """
        Raises:
            ApplicationNotFoundException: If no application has this id
        """
        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(str(application_id))
        return application

    async def update_application(
        self,
        application_id: UUID,
        changes: ApplicationUpdate,
    ) -> LoanApplication:
        """
        Apply a partial edit to a Pending application and recompute the
        derived fields.

        Raises:
            ApplicationNotFoundException: If no application has this id
            ApplicationNotEditableException: If the application was already decided
            InvalidApplicationException: If the merged fields fail validation
        """
        current = await self.get_application(application_id)
        if not current.is_pending:
            raise ApplicationNotEditableException(str(application_id), current.status.value)

        merged = ApplicationInput(
            name=changes.name if changes.name is not None else current.name,
            loan_amount=changes.loan_amount if changes.loan_amount is not None else current.loan_amount,
            rate_of_interest=(
                changes.rate_of_interest
                if changes.rate_of_interest is not None
                else current.rate_of_interest
            ),
            start_date=changes.start_date or current.start_date,
            end_date=changes.end_date or current.end_date,
        )
        errors = merged.validate()
        if errors:
            raise InvalidApplicationException("; ".join(errors))

        rate = to_rate(merged.rate_of_interest)
        terms = calculate_loan_terms(merged.loan_amount, rate, merged.start_date, merged.end_date)
        updated = replace(
            current,
            name=merged.name.strip(),
            loan_amount=to_money(merged.loan_amount),
            rate_of_interest=rate,
            start_date=merged.start_date,
            end_date=merged.end_date,
            days_between=terms.days_between,
            total_amount=terms.total_amount,
            updated_at=datetime.utcnow(),
        )

        saved = await self._application_repo.update(updated)
        logger.info("application_updated", application_id=str(application_id))
        return saved

    async def delete_application(self, application_id: UUID) -> None:
        deleted = await self._application_repo.delete(application_id)
        if not deleted:
            raise ApplicationNotFoundException(str(application_id))
        logger.info("application_deleted", application_id=str(application_id))

    async def change_status(
        self,
        application_id: UUID,
        target: ApplicationStatus,
    ) -> StatusTransition:
        """
        Approve or reject a Pending application.

        Approval persists a new borrower alongside the updated application.

        Raises:
            ApplicationNotFoundException: If no application has this id
            InvalidStatusTransitionException: If the application is not Pending
        """
        application = await self.get_application(application_id)
        transition = apply_status_transition(application, target)

        saved_application = await self._application_repo.update(transition.application)
        borrower = None
        if transition.borrower is not None:
            borrower = await self._borrower_repo.save(transition.borrower)

        record_application_transition(target.value)
        logger.info(
            "application_status_changed",
            application_id=str(application_id),
            status=target.value,
            borrower_id=str(borrower.id) if borrower else None,
        )

        return StatusTransition(application=saved_application, borrower=borrower)
