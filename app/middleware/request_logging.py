"""
Request Logging Middleware.

Logs all API requests in JSON format for analytics and debugging.
"""

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
from urllib.parse import parse_qsl, urlencode

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..config import get_settings

logger = logging.getLogger(__name__)

# Dedicated request logger
request_logger = logging.getLogger("api.requests")

# Query parameters never written to logs in clear text
SENSITIVE_PARAMS = frozenset(("key", "api_key", "token"))


def setup_request_logging(log_file: str) -> None:
    """
    Set up file logging for API requests.

    Logs in JSON Lines format for easy parsing.
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Avoid stacking handlers when the app is built more than once
    for existing in request_logger.handlers:
        if isinstance(existing, RotatingFileHandler) and Path(existing.baseFilename) == log_path.resolve():
            return

    handler = RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    handler.setLevel(logging.INFO)

    # JSON format
    formatter = logging.Formatter("%(message)s")
    handler.setFormatter(formatter)

    request_logger.addHandler(handler)
    request_logger.setLevel(logging.INFO)


def mask_query(query: str) -> str:
    """Replace values of sensitive query parameters with '***'."""
    if not query:
        return query
    pairs = [
        (name, "***" if name.lower() in SENSITIVE_PARAMS else value)
        for name, value in parse_qsl(query, keep_blank_values=True)
    ]
    return urlencode(pairs)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs all requests in structured JSON format.

    Captures:
    - Timestamp
    - Method, path and (masked) query
    - Response status and time
    - User agent
    - Client IP
    """

    def __init__(self, app, log_to_file: Optional[bool] = None):
        super().__init__(app)
        self._settings = get_settings()

        if log_to_file is None:
            log_to_file = self._settings.log_requests_to_file
        if log_to_file:
            setup_request_logging(self._settings.request_log_file)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request."""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"

    async def dispatch(self, request: Request, call_next) -> Response:
        """Log request and response details."""
        start_time = time.time()

        method = request.method
        path = request.url.path
        query = mask_query(request.url.query) if request.url.query else None
        client_ip = self._get_client_ip(request)
        user_agent = request.headers.get("User-Agent", "unknown")

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        request_id = getattr(request.state, "request_id", None)

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "request_id": request_id,
            "method": method,
            "path": path,
            "query": query,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
            "user_agent": user_agent[:100] if user_agent else None,  # Truncate long UAs
        }

        # Log to file (JSON)
        request_logger.info(json.dumps(log_entry))

        # Also log summary to standard logger
        logger.info(f"{method} {path} - {response.status_code} - {duration_ms:.1f}ms")

        return response
