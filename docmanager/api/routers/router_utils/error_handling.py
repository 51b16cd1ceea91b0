"""
Service error handling utilities.

Provides a decorator for consistent error handling across API endpoints:
domain exceptions raised by services become HTTPExceptions with the
matching status code.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError

from docmanager.core.exceptions import (
    BadRequestError,
    ConflictError,
    DocManagerException,
    ForbiddenError,
    NotFoundError,
    PayloadTooLargeError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_ERROR: tuple[tuple[type[DocManagerException], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (BadRequestError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (PayloadTooLargeError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
)


def status_for(error: DocManagerException) -> int:
    """HTTP status code for a domain exception (500 when unmapped)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_service_errors(func: F) -> F:
    """
    Decorator to handle service errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with their details
    - Mapping domain exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except DocManagerException as e:
            status_code = status_for(e)
            logger.warning(
                "Request rejected",
                extra={
                    "error": e.message,
                    "error_type": type(e).__name__,
                    "status_code": status_code,
                    "details": e.details,
                },
            )
            headers = (
                {"WWW-Authenticate": "Bearer"}
                if status_code == status.HTTP_401_UNAUTHORIZED
                else None
            )
            raise HTTPException(status_code=status_code, detail=e.message, headers=headers)

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(),
            )

        except Exception as e:
            logger.exception("Unexpected failure in request", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

    return wrapper  # type: ignore
