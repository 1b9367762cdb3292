"""
Error handling utilities.

Provides a decorator that maps domain exceptions to HTTP responses
consistently across all routers.

Dependencies: fastapi, pydantic, course_backend.core.exceptions
System role: Domain error -> HTTP status translation
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from course_backend.core.exceptions import (
    BusinessRuleError,
    ConflictError,
    CourseEngineException,
    GoneError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_CATEGORY: tuple[tuple[type[CourseEngineException], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (GoneError, status.HTTP_410_GONE),
    (BusinessRuleError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def status_for(exc: CourseEngineException) -> int | None:
    """HTTP status for a domain exception category, None if uncategorized."""
    for category, code in STATUS_BY_CATEGORY:
        if isinstance(exc, category):
            return code
    return None


def handle_course_errors(func: F) -> F:
    """
    Decorator to handle domain errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of expected failures as warnings with their context
    - Mapping exception categories to HTTP status codes
    - Hiding internals of unexpected failures behind a generic 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except CourseEngineException as e:
            code = status_for(e)
            if code is None:
                logger.exception(
                    "Unexpected domain failure",
                    extra={"error_type": type(e).__name__, **e.details},
                )
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="An internal error occurred",
                ) from e
            logger.warning(
                e.message,
                extra={"error_type": type(e).__name__, "status_code": code, **e.details},
            )
            raise HTTPException(status_code=code, detail=e.message) from e

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False, include_context=False),
            ) from e

        except Exception as e:
            logger.exception(
                "Unexpected failure in course operation",
                extra={"error_type": type(e).__name__},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            ) from e

    return wrapper  # type: ignore
