"""Request validation rules.

A rule is a plain function taking the raw payload and returning either
``None`` or a ``FieldError``. Rules never raise; ``run_rules`` evaluates
every rule in declaration order and collects the failures, so a single
response reports all violated fields.
"""
import re
import uuid
from typing import Any, Callable, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


class FieldError(BaseModel):
    """A single failed rule."""

    field: str = Field(..., description="Name of the offending field")
    message: str = Field(..., description="Human readable reason")


class ValidationResult(BaseModel):
    """Outcome of running a rule set: normalized data or errors, never both."""

    data: Optional[dict[str, Any]] = None
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


Rule = Callable[[Mapping[str, Any]], Optional[FieldError]]


def is_uuid(value: Any) -> bool:
    """True for a canonical 8-4-4-4-12 hex UUID string."""
    return isinstance(value, str) and UUID_PATTERN.fullmatch(value) is not None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def required(field: str, message: str) -> Rule:
    def rule(payload: Mapping[str, Any]) -> Optional[FieldError]:
        if _is_blank(payload.get(field)):
            return FieldError(field=field, message=message)
        return None

    return rule


def uuid_format(field: str, message: str) -> Rule:
    def rule(payload: Mapping[str, Any]) -> Optional[FieldError]:
        if not is_uuid(payload.get(field)):
            return FieldError(field=field, message=message)
        return None

    return rule


def string_type(field: str, message: str) -> Rule:
    def rule(payload: Mapping[str, Any]) -> Optional[FieldError]:
        if not isinstance(payload.get(field), str):
            return FieldError(field=field, message=message)
        return None

    return rule


def min_length(field: str, length: int, message: str) -> Rule:
    def rule(payload: Mapping[str, Any]) -> Optional[FieldError]:
        value = payload.get(field)
        if not isinstance(value, str) or len(value) < length:
            return FieldError(field=field, message=message)
        return None

    return rule


def first_failure(*rules: Rule) -> Rule:
    """Combine the checks of one field; only the first failure is reported."""

    def rule(payload: Mapping[str, Any]) -> Optional[FieldError]:
        for check in rules:
            error = check(payload)
            if error is not None:
                return error
        return None

    return rule


def when_present(field: str, inner: Rule) -> Rule:
    """Apply ``inner`` only if ``field`` is a key of the payload."""

    def rule(payload: Mapping[str, Any]) -> Optional[FieldError]:
        if field not in payload:
            return None
        return inner(payload)

    return rule


def run_rules(
    payload: Mapping[str, Any],
    rules: Sequence[Rule],
    normalize: Optional[Callable[[Mapping[str, Any]], dict[str, Any]]] = None,
) -> ValidationResult:
    """Evaluate every rule and accumulate failures in declaration order."""
    errors = [error for error in (rule(payload) for rule in rules) if error is not None]
    if errors:
        return ValidationResult(errors=errors)

    data = normalize(payload) if normalize else dict(payload)
    return ValidationResult(data=data)


def validate_id(value: Any, label: str) -> ValidationResult:
    """Check a path identifier; the normalized data holds it as ``uuid.UUID``."""
    rule = first_failure(
        required("id", f"{label} ID is required"),
        uuid_format("id", f"{label} ID must be a valid UUID"),
    )
    return run_rules({"id": value}, [rule], lambda payload: {"id": uuid.UUID(payload["id"])})
