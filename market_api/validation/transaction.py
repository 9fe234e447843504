"""Validation rules for transaction payloads.

Each of the three references must be present and a canonical UUID. Whether
the referenced user or material exists is left to the store's foreign keys.
"""
import uuid
from typing import Any, Mapping

from market_api.validation.rules import (
    Rule,
    ValidationResult,
    first_failure,
    required,
    run_rules,
    uuid_format,
    validate_id,
    when_present,
)

# Payload key -> (model attribute, label), in declaration order
TRANSACTION_FIELDS = {
    "vendorId": ("vendor_id", "Vendor ID"),
    "customerId": ("customer_id", "Customer ID"),
    "materialId": ("material_id", "Material ID"),
}


def _reference_rule(field: str, label: str) -> Rule:
    return first_failure(
        required(field, f"{label} is required"),
        uuid_format(field, f"{label} must be a valid UUID"),
    )


CREATE_RULES = [
    _reference_rule(field, label) for field, (_, label) in TRANSACTION_FIELDS.items()
]

UPDATE_RULES = [
    when_present(field, _reference_rule(field, label))
    for field, (_, label) in TRANSACTION_FIELDS.items()
]


def _normalize(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {
        attribute: uuid.UUID(payload[field])
        for field, (attribute, _) in TRANSACTION_FIELDS.items()
        if field in payload
    }


def validate_transaction_create(payload: Mapping[str, Any]) -> ValidationResult:
    """All three references are required."""
    return run_rules(payload, CREATE_RULES, _normalize)


def validate_transaction_update(
    transaction_id: Any,
    payload: Mapping[str, Any],
) -> ValidationResult:
    """Check the path id first, then whichever references the body carries."""
    id_result = validate_id(transaction_id, "Transaction")
    body_result = run_rules(payload, UPDATE_RULES, _normalize)

    errors = id_result.errors + body_result.errors
    if errors:
        return ValidationResult(errors=errors)

    return ValidationResult(data={**body_result.data, **id_result.data})
