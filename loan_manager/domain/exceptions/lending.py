"""Loan application and borrower domain exceptions."""

from .base import DomainException


class ApplicationNotFoundException(DomainException):
    """Raised when a loan application cannot be found."""

    def __init__(self, application_id: str):
        super().__init__(
            message=f"Application not found: {application_id}",
            code="APPLICATION_NOT_FOUND",
        )
        self.application_id = application_id


class BorrowerNotFoundException(DomainException):
    """Raised when a borrower cannot be found."""

    def __init__(self, borrower_id: str):
        super().__init__(
            message=f"Borrower not found: {borrower_id}",
            code="BORROWER_NOT_FOUND",
        )
        self.borrower_id = borrower_id


class InvalidStatusTransitionException(DomainException):
    """Raised when an application cannot move to the requested status."""

    def __init__(self, current: str, target: str):
        super().__init__(
            message=f"Cannot change application status from {current} to {target}",
            code="INVALID_STATUS_TRANSITION",
        )
        self.current = current
        self.target = target


class InvalidApplicationException(DomainException):
    """Raised when application fields break a lending rule."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_APPLICATION",
        )


class ApplicationNotEditableException(DomainException):
    """Raised when editing an application that has already been decided."""

    def __init__(self, application_id: str, status: str):
        super().__init__(
            message=f"Only Pending applications can be edited; {application_id} is {status}",
            code="APPLICATION_NOT_EDITABLE",
        )
        self.application_id = application_id
        self.status = status


class NothingDueException(DomainException):
    """Raised when a reminder is requested for a borrower who owes nothing."""

    def __init__(self, borrower_id: str):
        super().__init__(
            message=f"Nothing is due for borrower {borrower_id}",
            code="NOTHING_DUE",
        )
        self.borrower_id = borrower_id
