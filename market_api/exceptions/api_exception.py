"""API exception module."""
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
    ):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ValidationError(BadRequestError):
    """Request payload failed one or more field rules.

    ``errors`` keeps the order in which the rules were declared.
    """

    def __init__(self, errors: list):
        super().__init__(detail="Validation failed")
        self.errors = errors


class ConstraintError(BadRequestError):
    """Write rejected by a unique or foreign-key constraint."""

    def __init__(self, detail: str = "Constraint violation"):
        super().__init__(detail=detail)


class StoreError(APIException):
    """Any other persistence failure."""

    def __init__(
        self,
        detail: str = "Database error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        super().__init__(status_code=status_code, detail=detail)
