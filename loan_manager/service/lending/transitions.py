"""Application status state machine."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from loan_manager.domain.entities import ApplicationStatus, Borrower, LoanApplication
from loan_manager.domain.exceptions import InvalidStatusTransitionException

ALLOWED_TRANSITIONS = {
    ApplicationStatus.PENDING: {ApplicationStatus.APPROVED, ApplicationStatus.REJECTED},
    ApplicationStatus.APPROVED: set(),
    ApplicationStatus.REJECTED: set(),
}


@dataclass(frozen=True)
class StatusTransition:
    """Records to persist after a status change."""

    application: LoanApplication
    borrower: Optional[Borrower] = None


def promote_to_borrower(application: LoanApplication) -> Borrower:
    """Copy an approved application into a new borrower record."""
    return Borrower(
        application_id=application.id,
        name=application.name,
        loan_amount=application.loan_amount,
        rate_of_interest=application.rate_of_interest,
        start_date=application.start_date,
        end_date=application.end_date,
        days_between=application.days_between,
        total_amount=application.total_amount,
        due_date=application.end_date,
        status=ApplicationStatus.APPROVED,
        sn_no=application.sn_no,
    )


def apply_status_transition(
    application: LoanApplication,
    target: ApplicationStatus,
) -> StatusTransition:
    """
    Move an application to a new status.

    Pending is the only non-terminal state. Approval also yields the
    borrower record to create; the input application is not mutated.

    Raises:
        InvalidStatusTransitionException: If the move is not allowed
    """
    if target not in ALLOWED_TRANSITIONS[application.status]:
        raise InvalidStatusTransitionException(
            current=application.status.value,
            target=target.value,
        )

    updated = replace(application, status=target, updated_at=datetime.utcnow())

    if target == ApplicationStatus.APPROVED:
        return StatusTransition(application=updated, borrower=promote_to_borrower(updated))

    return StatusTransition(application=updated)
