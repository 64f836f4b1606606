"""Shared schema base and the error envelope."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ValidationErrorDetail(BaseModel):
    field: str
    message: str
    type: str


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""

    success: bool = False
    error: str | list[ValidationErrorDetail] = Field(
        ...,
        description="Error message, or field errors for invalid requests",
        examples=["Payment not found"],
    )
    code: str = Field(..., description="Error code", examples=["PAYMENT_NOT_FOUND"])
    request_id: str | None = Field(None, description="Request ID for tracing")


class HistoryResponseSchema(CamelModel):
    """Placeholder history listing."""

    success: bool = True
    message: str = "History feature coming soon"
    data: list[Any] = Field(default_factory=list)
