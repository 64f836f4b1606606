"""Loan application and borrower schemas."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from loan_manager.application.dto import BorrowerSummary
from loan_manager.domain.entities import BorrowerPayment, LoanApplication

from .common import CamelModel

DEFAULT_TERM_DAYS = 30
MAX_RATE = Decimal("999.9999")


def _default_end_date() -> date:
    return date.today() + timedelta(days=DEFAULT_TERM_DAYS)


class ApplicationCreateSchema(CamelModel):
    """Schema for POST /api/v1/applications."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    loan_amount: Decimal = Field(..., gt=0, examples=[1000])
    rate_of_interest: Decimal = Field(
        Decimal("1"),
        ge=0,
        le=MAX_RATE,
        description="Percent charged per 30 days",
    )
    start_date: date = Field(default_factory=date.today)
    end_date: date = Field(default_factory=_default_end_date)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v.strip()

    @model_validator(mode="after")
    def check_dates(self) -> "ApplicationCreateSchema":
        if self.end_date < self.start_date:
            raise ValueError("endDate cannot be before startDate")
        return self


class ApplicationUpdateSchema(CamelModel):
    """Schema for PUT /api/v1/applications/{id}; omitted fields are unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    loan_amount: Optional[Decimal] = Field(None, gt=0)
    rate_of_interest: Optional[Decimal] = Field(None, ge=0, le=MAX_RATE)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self) -> "ApplicationUpdateSchema":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate cannot be before startDate")
        return self


class ApplicationSchema(CamelModel):
    id: UUID
    sn_no: Optional[int]
    name: str
    loan_amount: float
    rate_of_interest: float
    start_date: date
    end_date: date
    days_between: int
    total_amount: float
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, application: LoanApplication) -> "ApplicationSchema":
        return cls(
            id=application.id,
            sn_no=application.sn_no,
            name=application.name,
            loan_amount=float(application.loan_amount),
            rate_of_interest=float(application.rate_of_interest),
            start_date=application.start_date,
            end_date=application.end_date,
            days_between=application.days_between,
            total_amount=float(application.total_amount),
            status=application.status.value,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


class BorrowerSchema(CamelModel):
    id: UUID
    numeric_id: Optional[int]
    application_id: UUID
    sn_no: Optional[int]
    name: str
    loan_amount: float
    rate_of_interest: float
    start_date: date
    end_date: date
    due_date: date
    days_between: int
    total_amount: float
    total_paid: float
    due_amount: float
    status: str

    @classmethod
    def from_summary(cls, summary: BorrowerSummary) -> "BorrowerSchema":
        b = summary.borrower
        return cls(
            id=b.id,
            numeric_id=b.numeric_id,
            application_id=b.application_id,
            sn_no=b.sn_no,
            name=b.name,
            loan_amount=float(b.loan_amount),
            rate_of_interest=float(b.rate_of_interest),
            start_date=b.start_date,
            end_date=b.end_date,
            due_date=b.due_date,
            days_between=b.days_between,
            total_amount=float(b.total_amount),
            total_paid=float(summary.total_paid),
            due_amount=float(summary.due_amount),
            status=b.status.value,
        )


class RepaymentCreateSchema(CamelModel):
    """Schema for POST /api/v1/borrowers/{id}/payments."""

    amount: Decimal = Field(..., gt=0)
    paid_on: Optional[date] = Field(None, alias="date")


class RepaymentSchema(CamelModel):
    id: UUID
    borrower_id: UUID
    amount: float
    paid_on: date = Field(..., alias="date")
    created_at: datetime

    @classmethod
    def from_entity(cls, payment: BorrowerPayment) -> "RepaymentSchema":
        return cls(
            id=payment.id,
            borrower_id=payment.borrower_id,
            amount=float(payment.amount),
            paid_on=payment.paid_on,
            created_at=payment.created_at,
        )


class ReminderRequestSchema(CamelModel):
    """Schema for POST /api/v1/borrowers/{id}/reminders."""

    borrower_email: EmailStr
    borrower_phone: Optional[str] = None
    send_sms: bool = Field(False, alias="sendSMS")


class ApplicationResponseSchema(CamelModel):
    success: bool = True
    data: ApplicationSchema


class ApplicationListResponseSchema(CamelModel):
    success: bool = True
    data: list[ApplicationSchema]


class StatusChangeResponseSchema(CamelModel):
    success: bool = True
    data: ApplicationSchema
    borrower: Optional[BorrowerSchema] = None


class BorrowerResponseSchema(CamelModel):
    success: bool = True
    data: BorrowerSchema


class BorrowerListResponseSchema(CamelModel):
    success: bool = True
    data: list[BorrowerSchema]


class RepaymentResponseSchema(CamelModel):
    success: bool = True
    data: RepaymentSchema


class RepaymentListResponseSchema(CamelModel):
    success: bool = True
    data: list[RepaymentSchema]


class ReminderResponseSchema(CamelModel):
    success: bool = True
    results: list[dict[str, Any]] = Field(default_factory=list)


class DeletedResponseSchema(CamelModel):
    success: bool = True


class LegacyNotifySchema(CamelModel):
    """Body of POST /api/notify; presence is checked by the route."""

    to: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
