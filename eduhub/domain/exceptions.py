"""Domain exceptions for the eduhub application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class EduHubException(Exception):
    """Base exception for all eduhub application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error envelope used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EduHubException):
    """Raised when input validation fails (bad request)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(EduHubException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ForbiddenException(EduHubException):
    """Raised when the principal is authenticated but may not act on the target.

    Covers tenant mismatch, broken ownership chains, missing or inactive
    batch membership and insufficient role.
    """

    def __init__(self, message: str = "Forbidden", reason: str | None = None) -> None:
        """Initialize with message and optional machine-readable reason.

        Args:
            message: Human-readable message.
            reason: Optional reason key (e.g. 'tenant_mismatch', 'broken_chain').
        """
        details = {"reason": reason} if reason else {}
        super().__init__(message, "FORBIDDEN", details)


class ResourceNotFoundException(EduHubException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: int | str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Human name of the resource (e.g. 'Batch', 'User').
            resource_id: The id that was not found, when known.
            message: Optional override for the default '<type> not found'.
        """
        details: dict[str, Any] = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(
            message or f"{resource_type} not found",
            "RESOURCE_NOT_FOUND",
            details,
        )


class AlreadyExistsException(EduHubException):
    """Raised when creating a record that collides with a unique constraint."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "ALREADY_EXISTS")


class SqlNotConfiguredException(EduHubException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
