"""Exception handlers mapping domain errors to the JSON error envelope."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from loan_manager.domain.exceptions import (
    ApplicationNotEditableException,
    ApplicationNotFoundException,
    BorrowerNotFoundException,
    DomainException,
    InvalidApplicationException,
    InvalidPaymentRequestException,
    InvalidStatusTransitionException,
    NotificationDeliveryException,
    NotificationQueueException,
    NothingDueException,
    PaymentNotFoundException,
    ProviderException,
    ProviderNotConfiguredException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

STATUS_BY_EXCEPTION: dict[type[DomainException], int] = {
    InvalidApplicationException: 400,
    InvalidPaymentRequestException: 400,
    ApplicationNotFoundException: 404,
    BorrowerNotFoundException: 404,
    PaymentNotFoundException: 404,
    InvalidStatusTransitionException: 409,
    ApplicationNotEditableException: 409,
    NothingDueException: 409,
    ProviderNotConfiguredException: 500,
    ProviderException: 500,
    NotificationQueueException: 500,
    NotificationDeliveryException: 500,
}


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain exception; unmapped subclasses are 400."""
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_EXCEPTION:
            return STATUS_BY_EXCEPTION[cls]
    return 400


def error_body(error: Any, code: str) -> dict[str, Any]:
    return {
        "success": False,
        "error": error,
        "code": code,
        "request_id": get_request_id(),
    }


def validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to [{field, message, type}], dropping the location prefix."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append(
            {
                "field": ".".join(loc),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
        )
    return details


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Every failure is rendered as {success: false, error, code, request_id}.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        details = validation_details(exc)
        logger.info("request_validation_failed", path=request.url.path, errors=len(details))
        return JSONResponse(status_code=400, content=error_body(details, "VALIDATION_ERROR"))

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        status_code = status_for(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "domain_exception",
            path=request.url.path,
            code=exc.code,
            message=exc.message,
            status_code=status_code,
        )
        return JSONResponse(
            status_code=status_code,
            content={"success": False, **exc.to_dict(), "request_id": get_request_id()},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("An unexpected error occurred.", "INTERNAL_ERROR"),
        )
