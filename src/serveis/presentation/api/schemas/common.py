"""Common schemas shared across API endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys.

    Snake-case names are still accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code for programmatic handling")
    errors: Optional[list[FieldError]] = Field(
        default=None,
        description="Per-field validation messages",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Employer not found", "code": "EMPLOYER_NOT_FOUND"},
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
