"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from loan_manager.domain.entities import Borrower, BorrowerPayment, LoanApplication


class ApplicationRepository(ABC):
    """
    Abstract repository for LoanApplication persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def save(self, application: LoanApplication) -> LoanApplication:
        """
        Persist a new application.

        Assigns the next sequential display number when sn_no is unset.

        Args:
            application: The application to save

        Returns:
            The saved application with sn_no populated
        """
        ...

    @abstractmethod
    async def update(self, application: LoanApplication) -> LoanApplication:
        """Overwrite the stored fields of an existing application."""
        ...

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[LoanApplication]:
        ...

    @abstractmethod
    async def list(self, name: Optional[str] = None) -> List[LoanApplication]:
        """
        List applications ordered by display number.

        Args:
            name: Optional case-insensitive substring filter on the name
        """
        ...

    @abstractmethod
    async def delete(self, application_id: UUID) -> bool:
        """Delete an application. Returns False if it did not exist."""
        ...


class BorrowerRepository(ABC):
    """Abstract repository for Borrower persistence."""

    @abstractmethod
    async def save(self, borrower: Borrower) -> Borrower:
        """Persist a borrower, assigning the next numeric_id when unset."""
        ...

    @abstractmethod
    async def get_by_id(self, borrower_id: UUID) -> Optional[Borrower]:
        ...

    @abstractmethod
    async def list(self, name: Optional[str] = None) -> List[Borrower]:
        ...

    @abstractmethod
    async def delete(self, borrower_id: UUID) -> bool:
        """Delete a borrower and its repayments."""
        ...


class RepaymentRepository(ABC):
    """Abstract repository for repayments recorded against borrowers."""

    @abstractmethod
    async def save(self, payment: BorrowerPayment) -> BorrowerPayment:
        ...

    @abstractmethod
    async def list_by_borrower(self, borrower_id: UUID) -> List[BorrowerPayment]:
        """List a borrower's repayments, oldest first."""
        ...

    @abstractmethod
    async def totals_by_borrower(self) -> Dict[UUID, Decimal]:
        """Sum of repayments per borrower id."""
        ...
