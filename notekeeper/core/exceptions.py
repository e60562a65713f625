"""
Application Exceptions.

Error taxonomy shared by the service layer and the HTTP boundary.
Each exception carries a stable machine-readable code; the status
code it maps to lives in exception_handlers.py.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a referenced resource does not exist."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """
    Raised when input fields are missing, malformed or out of bounds.

    ``details`` enumerates the violating fields in the same shape the
    request validation handler produces.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")

    @classmethod
    def for_field(cls, field: str, message: str, error_type: str = "value_error") -> "ValidationError":
        """Build a validation error naming a single field."""
        return cls(
            message,
            details={
                "validation_errors": [
                    {"field": field, "message": message, "type": error_type},
                ]
            },
        )

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed validation."""
        return [err["field"] for err in self.details.get("validation_errors", [])]


class UnauthenticatedError(ApplicationError):
    """Raised when the request carries no valid actor identity."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, code="AUTH_UNAUTHENTICATED")


class ForbiddenError(ApplicationError):
    """Raised when a policy denies the actor the requested action."""

    def __init__(self, message: str = "This action is forbidden") -> None:
        super().__init__(message, code="AUTHZ_FORBIDDEN")


class RateLimitError(ApplicationError):
    """Raised when an actor exceeds the request rate limit."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int = 0) -> None:
        self.retry_after = retry_after
        super().__init__(message, code="RATE_LIMITED")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
