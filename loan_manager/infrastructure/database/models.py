"""SQLAlchemy ORM models for loan applications, borrowers and repayments."""

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class LoanApplicationModel(Base):
    """A submitted loan application."""

    __tablename__ = "loan_applications"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    sn_no: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    loan_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    rate_of_interest: Mapped[Decimal] = mapped_column(Numeric(7, 4), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_between: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Pending")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class BorrowerModel(Base):
    """An approved application promoted to an active loan."""

    __tablename__ = "borrowers"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    numeric_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # Plain reference: borrowers outlive deleted applications.
    application_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), nullable=False, index=True)
    sn_no: Mapped[int | None] = mapped_column(Integer, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    loan_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    rate_of_interest: Mapped[Decimal] = mapped_column(Numeric(7, 4), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_between: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Approved")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class BorrowerPaymentModel(Base):
    """A repayment recorded against a borrower."""

    __tablename__ = "borrower_payments"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    borrower_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("borrowers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    paid_on: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
