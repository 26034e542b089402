"""Domain exceptions for the MeetMe search service.

Defines domain-level exceptions that represent rule violations and search
failures. These exceptions are independent of infrastructure concerns.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class MeetMeException(Exception):
    """Base exception for all MeetMe application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, search_type).
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
        """Return the JSON error body used by the API exception handler."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(MeetMeException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or parameter that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SqlNotConfiguredException(MeetMeException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class SearchFailedException(MeetMeException):
    """Raised at the API boundary when a search returned a failed result."""

    def __init__(self, message: str, error_code: str = "SEARCH_FAILED") -> None:
        super().__init__(message, error_code)


class SearchTimeoutException(MeetMeException):
    """Raised inside the search service when the fan-out exceeds its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(
            f"Search timed out after {timeout_seconds:g} seconds",
            "SEARCH_TIMEOUT",
            {"timeout_seconds": timeout_seconds},
        )


class SearchCancelledException(MeetMeException):
    """Raised inside the search service when the caller's cancel signal fires."""

    def __init__(self) -> None:
        super().__init__("Search was cancelled", "SEARCH_CANCELLED")
