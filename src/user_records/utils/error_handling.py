"""
Centralized Error Handling
Exception handlers, request tracing and log sanitization shared by every route.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict
from contextvars import ContextVar

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erreur interne du serveur"


class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'secret', 'authorization',
        'bearer', 'credential', 'api_key'
    ]
    MAX_BODY_LOG_SIZE = 5000
    INCLUDE_TRACEBACK = True

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = str(field_name).lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Any) -> Any:
        """Recursively redact sensitive values and truncate oversized strings"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(key) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data


def describe_exception(exception: BaseException) -> Dict[str, Any]:
    """JSON-safe description of an exception for log entries"""
    details = {
        "type": type(exception).__name__,
        "details": str(exception),
    }
    cause = exception.__cause__
    if cause is not None:
        details["cause"] = {"type": type(cause).__name__, "details": str(cause)}
    return details


def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to tag every request and response with a trace ID"""

    async def dispatch(self, request: Request, call_next):
        trace_id = new_trace_id()
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        return response


def log_unhandled_exception(request: Request, exception: Exception) -> str:
    """Log an exception that escaped a route, returning its trace ID"""
    trace_id = getattr(request.state, "trace_id", None) or request_id_var.get('') or new_trace_id()

    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "trace_id": trace_id,
        "error_type": "internal_server_error",
        "request": {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
        },
        "exception": describe_exception(exception),
    }
    if ErrorHandlingConfig.INCLUDE_TRACEBACK:
        log_entry["exception"]["traceback"] = "".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        )

    logger.error(json.dumps(log_entry, indent=2))
    return trace_id


# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP exceptions as an {error} body"""
    detail = exc.detail if isinstance(exc.detail, str) else json.dumps(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internal details"""
    trace_id = log_unhandled_exception(request, exc)
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR_MESSAGE},
        headers={"X-Trace-ID": trace_id}
    )


def setup_error_handling(app):
    """Setup centralized error handling for the FastAPI app"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
