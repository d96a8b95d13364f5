# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response has the same shape:
#   {"detail": ..., "code": ..., "suggestion": ..., "details": ...}
#
# Status mapping:
#   BadRequestError          -> 400
#   RequestValidationError   -> 400 (field errors in details.errors)
#   UnauthorizedError        -> 401
#   ResourceNotFoundError    -> 404
#   DuplicateResourceError   -> 409 (also sqlalchemy IntegrityError)
#   anything else            -> 500
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class DemoProjectException(Exception):
    """
    Base exception for the Demo Project API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DEMO_PROJECT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Resource Exceptions
# =============================================================================

class ResourceNotFoundError(DemoProjectException):
    """Raised when an entity with the given id doesn't exist."""

    def __init__(self, resource: str, field: str, value: Any):
        super().__init__(
            message=f"{resource} not found with {field} {value}",
            code="RESOURCE_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} {field} is correct",
            details={"resource": resource, "field": field, "value": value},
        )


class DuplicateResourceError(DemoProjectException):
    """Raised when a unique field is already taken."""

    def __init__(self, resource: str, field: str, value: Any):
        super().__init__(
            message=f"{resource} already exists with {field} {value}",
            code="DUPLICATE_RESOURCE",
            status_code=409,
            suggestion=f"Use a different {field}",
            details={"resource": resource, "field": field, "value": value},
        )


class BadRequestError(DemoProjectException):
    """Raised when a request is well-formed but cannot be honoured."""

    def __init__(self, message: str, suggestion: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="BAD_REQUEST",
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


class UnauthorizedError(DemoProjectException):
    """Raised when credentials are wrong."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion="Check your credentials and sign in again",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def demo_project_exception_handler(
    request: Request,
    exc: DemoProjectException
) -> JSONResponse:
    """
    Convert DemoProjectException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI puts in front
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to a field -> message map.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), error.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation failed",
            "code": "VALIDATION_ERROR",
            "suggestion": "Fix the listed fields and retry",
            "details": {"errors": errors},
        }
    )


async def integrity_error_handler(
    request: Request,
    exc: IntegrityError
) -> JSONResponse:
    """
    Handle database constraint violations that slipped past service checks.
    """
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content={
            "detail": "Resource conflicts with existing data",
            "code": "DUPLICATE_RESOURCE",
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
