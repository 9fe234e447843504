"""Validation rules for user payloads."""
from typing import Any, Mapping

from market_api.validation.rules import (
    ValidationResult,
    first_failure,
    min_length,
    required,
    run_rules,
    string_type,
)

USERNAME_MIN_LENGTH = 3
USERNAME_NOT_UNIQUE = "Username must be unique"

USER_RULES = [
    first_failure(
        required("username", "Username is required"),
        string_type("username", "Username must be a string"),
        min_length(
            "username",
            USERNAME_MIN_LENGTH,
            f"Username must be at least {USERNAME_MIN_LENGTH} characters long",
        ),
    ),
]


def validate_user(payload: Mapping[str, Any]) -> ValidationResult:
    return run_rules(payload, USER_RULES, lambda data: {"username": data["username"]})
