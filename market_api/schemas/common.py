"""Shared response schemas."""
from typing import Union

from pydantic import BaseModel, Field

from market_api.validation.rules import FieldError


class ErrorResponse(BaseModel):
    """Body returned for a single failure."""

    error: str = Field(..., description="Failure reason")


class ValidationErrorResponse(BaseModel):
    """Body returned when request validation fails."""

    errors: list[FieldError] = Field(
        default_factory=list, description="Failed rules in declaration order"
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


ERROR_RESPONSES = {
    400: {
        "model": Union[ValidationErrorResponse, ErrorResponse],
        "description": "Validation errors, or a constraint or store failure",
    },
    404: {"model": ErrorResponse, "description": "Record not found"},
}
