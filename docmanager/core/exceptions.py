"""
Exception hierarchy for the document management backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocManagerException(Exception):
    """Base exception for all document management errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(DocManagerException):
    """Raised when a resource id does not resolve."""

    def __init__(
        self,
        resource: str,
        resource_id: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Human-readable resource name ("Document", "Ingestion job")
            resource_id: Identifier that failed to resolve
            details: Additional context
        """
        details = details or {}
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        self.resource = resource
        super().__init__(f"{resource} not found", details)


class ForbiddenError(DocManagerException):
    """Raised when an authenticated actor lacks permission for an action."""

    pass


class BadRequestError(DocManagerException):
    """Raised when a well-formed request violates a business invariant."""

    pass


class ConflictError(DocManagerException):
    """Raised when a unique resource already exists."""

    pass


class UnauthorizedError(DocManagerException):
    """Raised when credentials or a bearer token cannot be verified."""

    pass


class PayloadTooLargeError(DocManagerException):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, limit_bytes: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize payload too large error.

        Args:
            limit_bytes: Configured maximum upload size
            details: Additional context
        """
        details = details or {}
        details["limit_bytes"] = limit_bytes
        max_size_mb = round(limit_bytes / (1024 * 1024))
        super().__init__(
            f"File size exceeds the maximum allowed size of {max_size_mb}MB", details
        )
