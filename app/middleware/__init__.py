"""
FastAPI Middleware Module.

Request/response middleware and exception handlers for cross-cutting concerns:
- ErrorHandlerMiddleware: Consistent error response formatting
- RequestLoggingMiddleware: Structured request/response logging
- create_*_handler: Exception handlers mapping validation, HTTP, scoring
  and Google Maps errors to the shared error format

Middleware is applied in order defined in main.py (first added = outermost).
"""

from .error_handler import (
    APIError,
    ErrorHandlerMiddleware,
    create_api_error_handler,
    create_http_exception_handler,
    create_places_error_handler,
    create_scoring_error_handler,
    create_validation_error_handler,
)
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "APIError",
    "ErrorHandlerMiddleware",
    "RequestLoggingMiddleware",
    "create_api_error_handler",
    "create_http_exception_handler",
    "create_places_error_handler",
    "create_scoring_error_handler",
    "create_validation_error_handler",
]
