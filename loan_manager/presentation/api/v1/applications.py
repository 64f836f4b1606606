"""Loan application API endpoints."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from loan_manager.application.dto import ApplicationInput, ApplicationUpdate, BorrowerSummary
from loan_manager.application.services import ApplicationService
from loan_manager.core.dependencies import get_application_service
from loan_manager.domain.entities import ApplicationStatus
from loan_manager.presentation.schemas import (
    ApplicationCreateSchema,
    ApplicationListResponseSchema,
    ApplicationResponseSchema,
    ApplicationSchema,
    ApplicationUpdateSchema,
    BorrowerSchema,
    DeletedResponseSchema,
    ErrorResponseSchema,
    StatusChangeResponseSchema,
)
from loan_manager.service.lending import to_money

application_router = APIRouter(
    prefix="/api/v1/applications",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
    },
)

ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]


@application_router.post(
    "",
    response_model=ApplicationResponseSchema,
    status_code=201,
    summary="Create Application",
    description="""
    Submit a loan application. The term in days and the total repayable
    amount are computed from the principal, rate and dates.
    """,
)
async def create_application(
    request: ApplicationCreateSchema,
    service: ApplicationServiceDep,
) -> ApplicationResponseSchema:
    application = await service.create_application(
        ApplicationInput(
            name=request.name,
            loan_amount=request.loan_amount,
            rate_of_interest=request.rate_of_interest,
            start_date=request.start_date,
            end_date=request.end_date,
        )
    )
    return ApplicationResponseSchema(data=ApplicationSchema.from_entity(application))


@application_router.get("", response_model=ApplicationListResponseSchema, summary="List Applications")
async def list_applications(
    service: ApplicationServiceDep,
    name: Annotated[
        Optional[str],
        Query(max_length=255, description="Case-insensitive name filter"),
    ] = None,
) -> ApplicationListResponseSchema:
    applications = await service.list_applications(name=name)
    return ApplicationListResponseSchema(
        data=[ApplicationSchema.from_entity(a) for a in applications]
    )


@application_router.get("/{application_id}", response_model=ApplicationResponseSchema, summary="Get Application")
async def get_application(
    application_id: UUID,
    service: ApplicationServiceDep,
) -> ApplicationResponseSchema:
    application = await service.get_application(application_id)
    return ApplicationResponseSchema(data=ApplicationSchema.from_entity(application))


@application_router.put("/{application_id}", response_model=ApplicationResponseSchema, summary="Edit Application")
async def update_application(
    application_id: UUID,
    request: ApplicationUpdateSchema,
    service: ApplicationServiceDep,
) -> ApplicationResponseSchema:
    application = await service.update_application(
        application_id,
        ApplicationUpdate(
            name=request.name,
            loan_amount=request.loan_amount,
            rate_of_interest=request.rate_of_interest,
            start_date=request.start_date,
            end_date=request.end_date,
        ),
    )
    return ApplicationResponseSchema(data=ApplicationSchema.from_entity(application))


@application_router.delete("/{application_id}", response_model=DeletedResponseSchema, summary="Delete Application")
async def delete_application(
    application_id: UUID,
    service: ApplicationServiceDep,
) -> DeletedResponseSchema:
    await service.delete_application(application_id)
    return DeletedResponseSchema()


async def _change_status(
    service: ApplicationService,
    application_id: UUID,
    target: ApplicationStatus,
) -> StatusChangeResponseSchema:
    transition = await service.change_status(application_id, target)

    borrower = None
    if transition.borrower is not None:
        borrower = BorrowerSchema.from_summary(
            BorrowerSummary(
                borrower=transition.borrower,
                total_paid=to_money(0),
                due_amount=transition.borrower.total_amount,
            )
        )

    return StatusChangeResponseSchema(
        data=ApplicationSchema.from_entity(transition.application),
        borrower=borrower,
    )


@application_router.post(
    "/{application_id}/approve",
    response_model=StatusChangeResponseSchema,
    summary="Approve Application",
    description="Approve a Pending application and create its borrower record.",
    responses={409: {"model": ErrorResponseSchema, "description": "Application is not Pending"}},
)
async def approve_application(
    application_id: UUID,
    service: ApplicationServiceDep,
) -> StatusChangeResponseSchema:
    return await _change_status(service, application_id, ApplicationStatus.APPROVED)


@application_router.post(
    "/{application_id}/reject",
    response_model=StatusChangeResponseSchema,
    summary="Reject Application",
    responses={409: {"model": ErrorResponseSchema, "description": "Application is not Pending"}},
)
async def reject_application(
    application_id: UUID,
    service: ApplicationServiceDep,
) -> StatusChangeResponseSchema:
    return await _change_status(service, application_id, ApplicationStatus.REJECTED)
