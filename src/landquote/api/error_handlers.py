"""
FastAPI error handlers for consistent error responses.

Every LandQuoteException and request validation failure is rendered as an
ErrorResponse body.
"""

import logging
import traceback
from typing import List, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from landquote.core.config import settings
from landquote.core.errors import LandQuoteException
from landquote.models.errors import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def get_request_id(request: Request) -> Optional[str]:
    """
    Extract request ID from request state.

    Args:
        request: FastAPI request object

    Returns:
        Request ID if available, None otherwise
    """
    return getattr(request.state, "request_id", None)


def _render(status_code: int, error_response: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


async def landquote_exception_handler(request: Request, exc: LandQuoteException) -> JSONResponse:
    """
    Handle LandQuoteException and its subclasses.

    Args:
        request: FastAPI request object
        exc: LandQuoteException instance

    Returns:
        JSONResponse with error details
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{exc.error_code}: {exc.message}",
        extra={"error_code": exc.error_code, "status_code": exc.status_code},
    )

    return _render(
        exc.status_code,
        ErrorResponse(
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details or None,
            request_id=get_request_id(request),
            suggestions=exc.suggestions or None,
        ),
    )


async def validation_error_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """
    Handle pydantic validation errors raised for request bodies.

    Args:
        request: FastAPI request object
        exc: Validation error

    Returns:
        JSONResponse listing the failing fields
    """
    errors: List[ErrorDetail] = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error.get("loc", [])),
            message=error.get("msg", "Validation error"),
            code=error.get("type", "validation_error"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        f"Validation error: {len(errors)} field(s) failed validation",
        extra={"error_count": len(errors)},
    )

    return _render(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            request_id=get_request_id(request),
            suggestions=["Check the request format and field values"],
            errors=errors,
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: FastAPI request object
        exc: Exception instance

    Returns:
        JSONResponse with a generic message; details only in development
    """
    logger.error(
        f"Unhandled exception: {type(exc).__name__} - {exc}",
        exc_info=True,
        extra={"exception_type": type(exc).__name__},
    )

    details = None
    if settings.environment == "development":
        details = {
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
            "traceback": traceback.format_exc(),
        }

    return _render(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error_code="INTERNAL_ERROR",
            message="An unexpected error occurred",
            details=details,
            request_id=get_request_id(request),
            suggestions=["Try again later", "Contact support if the problem persists"],
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Register all error handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(LandQuoteException, landquote_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(PydanticValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Error handlers registered")
