"""Error Handlers — every failure leaves the API as one {error: {...}} envelope.

Invariants:
    - DonorRegistryError → its own to_response() at its own http_status
    - RequestValidationError → 400 VALIDATION_ERROR shaped like the domain
      ValidationError: top-level `field` names the first failing input, `details`
      lists every failure with its full location
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - 4xx logged at WARNING, 5xx at ERROR, always with error_code and path

Design Decisions:
    - Request-parsing failures are folded into the domain ValidationError so clients
      branch on one shape whether the check ran in pydantic or in the service
    - `field` drops the body/query/path source segment: "body.name" → "name",
      "query.limit" → "limit"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from donor_registry.core.errors import (
    DonorRegistryError, ErrorCategory, ErrorSeverity, ValidationError,
)

logger = logging.getLogger(__name__)

_REQUEST_SOURCES = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(DonorRegistryError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


def _respond(request: Request, error: DonorRegistryError, body: dict) -> JSONResponse:
    level = logging.ERROR if error.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{type(error).__name__}: {error.message}",
        extra={"error_code": error.code, "path": request.url.path},
    )
    return JSONResponse(status_code=error.http_status, content=body)


async def domain_error_handler(request: Request, exc: DonorRegistryError):
    return _respond(request, exc, exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = request_field(errors[0]["loc"]) if errors else "body"
    error = ValidationError(
        f"Invalid request data: {field}: {errors[0]['msg']}" if errors
        else "Invalid request data",
        field,
    )
    body = error.to_response()
    body["error"]["details"] = [
        {
            "field": ".".join(str(part) for part in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
    return _respond(request, error, body)


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def request_field(loc: tuple | list) -> str:
    """Dotted input name for a pydantic error location, without its request source."""
    parts = [str(part) for part in loc]
    if parts and parts[0] in _REQUEST_SOURCES:
        parts = parts[1:]
    return ".".join(parts) or "body"
