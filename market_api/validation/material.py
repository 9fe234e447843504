"""Validation rules for material payloads.

Only the synchronous checks live here; name uniqueness needs the store and
is checked by the material service once these pass.
"""
from typing import Any, Mapping

from market_api.validation.rules import (
    ValidationResult,
    first_failure,
    min_length,
    required,
    run_rules,
    string_type,
)

MATERIAL_NAME_MIN_LENGTH = 3
MATERIAL_NAME_NOT_UNIQUE = "Material name must be unique"

MATERIAL_RULES = [
    first_failure(
        required("materialName", "Material name is required"),
        string_type("materialName", "Material name must be a string"),
        min_length(
            "materialName",
            MATERIAL_NAME_MIN_LENGTH,
            f"Material name must be at least {MATERIAL_NAME_MIN_LENGTH} characters long",
        ),
    ),
]


def validate_material(payload: Mapping[str, Any]) -> ValidationResult:
    return run_rules(
        payload,
        MATERIAL_RULES,
        lambda data: {"material_name": data["materialName"]},
    )
