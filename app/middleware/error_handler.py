"""
Global Error Handler Middleware.

Provides consistent error response formatting across all endpoints.
"""

import logging
import uuid
from typing import Optional

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..clients.places_client import PlacesAPIError
from ..config import get_settings
from ..services.exceptions import (
    InvalidCoordinateError,
    InvalidPlaceTypesError,
    MissingLocationError,
    ScoringError,
)

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Custom API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


def format_error_response(
    code: str,
    message: str,
    request_id: str,
    details: Optional[dict] = None,
) -> dict:
    """Format a consistent error response."""
    response = {
        "error": True,
        "code": code,
        "message": message,
        "request_id": request_id,
    }
    if details:
        response["details"] = details
    return response


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", f"req_{uuid.uuid4().hex[:12]}")


def _error_json(
    request_id: str,
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=format_error_response(code, message, request_id, details),
        headers={"X-Request-ID": request_id},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all exceptions and returns consistent error responses.

    Adds request ID to all responses for debugging/support.
    """

    def __init__(self, app):
        super().__init__(app)
        self._settings = get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and handle any errors consistently."""
        # Generate request ID
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            # Add request ID to response headers
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            # Log the error
            logger.exception(f"Unhandled exception [request_id={request_id}]: {exc}")

            if isinstance(exc, APIError):
                return _error_json(request_id, exc.status_code, exc.code, exc.message, exc.details)

            # Only show details in debug mode
            message = str(exc) if self._settings.debug else "An internal error occurred"
            return _error_json(request_id, 500, "INTERNAL_ERROR", message)


def create_validation_error_handler():
    """Create a handler for FastAPI validation errors."""

    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle validation errors with consistent format."""
        # Extract field errors
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error.get("loc", []))
            errors.append({
                "field": field,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            })

        return _error_json(
            _request_id(request),
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            {"errors": errors},
        )

    return validation_error_handler


def create_http_exception_handler():
    """Create a handler for HTTP exceptions."""

    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with consistent format."""
        request_id = _request_id(request)

        # Handle structured detail (dict) or string detail
        if isinstance(exc.detail, dict):
            error_response = {
                **exc.detail,
                "request_id": request_id,
            }
        else:
            error_response = format_error_response(
                code=f"HTTP_{exc.status_code}",
                message=str(exc.detail),
                request_id=request_id,
            )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_response,
            headers={"X-Request-ID": request_id, **(exc.headers or {})},
        )

    return http_exception_handler


def create_api_error_handler():
    """Create a handler for APIError raised by routes."""

    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return _error_json(_request_id(request), exc.status_code, exc.code, exc.message, exc.details)

    return api_error_handler


def create_scoring_error_handler():
    """
    Create a handler for scoring core errors.

    - InvalidCoordinateError: 400 INVALID_COORDINATE
    - MissingLocationError: 422 MISSING_LOCATION
    - InvalidPlaceTypesError: 422 INVALID_PLACE_TYPES
    """

    async def scoring_error_handler(request: Request, exc: ScoringError) -> JSONResponse:
        request_id = _request_id(request)
        logger.warning(f"Scoring input rejected [request_id={request_id}]: {exc}")

        if isinstance(exc, InvalidCoordinateError):
            return _error_json(
                request_id, 400, "INVALID_COORDINATE", str(exc),
                {"reason": exc.reason},
            )
        if isinstance(exc, MissingLocationError):
            return _error_json(
                request_id, 422, "MISSING_LOCATION", str(exc),
                {"index": exc.index},
            )
        if isinstance(exc, InvalidPlaceTypesError):
            return _error_json(
                request_id, 422, "INVALID_PLACE_TYPES", str(exc),
                {"index": exc.index},
            )
        return _error_json(request_id, 400, "SCORING_ERROR", str(exc))

    return scoring_error_handler


def create_places_error_handler():
    """Create a handler for Google Maps failures (502 PLACES_API_ERROR)."""

    async def places_error_handler(request: Request, exc: PlacesAPIError) -> JSONResponse:
        details = {"status": exc.status} if exc.status else None
        return _error_json(_request_id(request), 502, "PLACES_API_ERROR", exc.message, details)

    return places_error_handler
