"""Helpers shared by the CRUD routers."""
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from market_api.exceptions.api_exception import ValidationError
from market_api.validation.rules import ValidationResult, validate_id


def ensure_valid(result: ValidationResult) -> dict[str, Any]:
    """Return the normalized data, or raise with every collected error."""
    if not result.ok:
        raise ValidationError(result.errors)
    return result.data


def checked_id(value: str, label: str) -> UUID:
    """Parse a path ID, raising a field error for the ``id`` field."""
    return ensure_valid(validate_id(value, label))["id"]


def request_body(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI request body documentation for a raw JSON payload."""
    return {
        "requestBody": {
            "content": {
                "application/json": {"schema": model.model_json_schema(by_alias=True)}
            },
            "required": True,
        }
    }
