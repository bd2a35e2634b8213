"""Global exception handlers rendering RFC 9457 Problem Details.

Provider and credential failures travel as Result values and are rendered
by ErrorResponseBuilder inside the route handlers. What reaches these
handlers is raised by the framework or by bugs:

    - HTTPException from the bearer dependency (401) and Starlette's own
      404/405 for unknown routes or methods
    - RequestValidationError for malformed bodies and query parameters
    - Anything else, logged with the tenant it was serving and hidden
      behind a generic 500

Exports:
    register_exception_handlers: Register the handlers on a FastAPI app
"""

from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.config import settings
from src.core.container import get_logger
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# status -> (title, type slug)
_STATUS_INFO: dict[int, tuple[str, str]] = {
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    422: ("Validation Failed", "validation-failed"),
    500: ("Internal Server Error", "internal-server-error"),
}


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    *,
    errors: list[ErrorDetail] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    title, slug = _STATUS_INFO.get(status_code, ("Error", "error"))
    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{slug}",
        title=title,
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        errors=errors or None,
        trace_id=getattr(request.state, "trace_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=dict(headers) if headers else None,
    )


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    """Dotted field path without the leading body/query/path segment."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in {"body", "query", "path", "header"}:
        parts = parts[1:]
    return ".".join(parts) or "unknown"


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render HTTPException, keeping its headers (e.g. WWW-Authenticate)."""
    assert isinstance(exc, StarletteHTTPException)
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _problem_response(
        request,
        exc.status_code,
        detail,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Render request validation failures with one entry per field.

    Example:
        POST /api/v1/integration-credentials without providerType ->
        422 with errors=[{"field": "providerType", "code": "missing", ...}]
    """
    assert isinstance(exc, RequestValidationError)
    field_errors = [
        ErrorDetail(
            field=_field_name(error.get("loc", ())),
            code=error.get("type", "validation_error"),
            message=error.get("msg", "Validation failed"),
        )
        for error in exc.errors()
    ]
    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed. Check 'errors' for details.",
        errors=field_errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and answer with an opaque 500."""
    get_logger().error(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error=str(exc),
        trace_id=getattr(request.state, "trace_id", None),
        request_method=request.method,
        request_path=request.url.path,
        account_identifier=request.path_params.get("account_identifier"),
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please contact support with the trace ID.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the Problem Details handlers on the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
