"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Access denials of any kind render the same
generic 403 body so clients cannot tell a missing target from a hidden one.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from geolab.core.config import get_settings
from geolab.domain.exceptions import (
    AuthorizationException,
    GeolabException,
    OrganizationLookupFailedException,
    UnknownRoleException,
)

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "ORGANIZATION_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "UNKNOWN_ROLE": 403,
    "VALIDATION_ERROR": 400,
    "ORGANIZATION_LOOKUP_FAILED": 503,
    "SERVICE_UNAVAILABLE": 503,
}

FORBIDDEN_BODY: dict[str, str] = {"error": "FORBIDDEN", "message": "Forbidden"}


def _geolab_exception_handler(request: Request, exc: GeolabException) -> JSONResponse:
    """Return JSON from GeolabException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _authorization_exception_handler(
    request: Request, exc: AuthorizationException
) -> JSONResponse:
    """Return the generic 403 body; resource/action details stay in logs."""
    logger.info(
        "Forbidden: %s %s (%s)", request.method, request.url.path, exc.details or "-"
    )
    return JSONResponse(status_code=403, content=FORBIDDEN_BODY)


def _unknown_role_handler(request: Request, exc: UnknownRoleException) -> JSONResponse:
    """Unknown role labels are a data-integrity problem: log loudly, answer generically."""
    logger.error(
        "Data integrity: unknown role label %r on %s %s",
        exc.role,
        request.method,
        request.url.path,
    )
    return JSONResponse(status_code=403, content=FORBIDDEN_BODY)


def _lookup_failed_handler(
    request: Request, exc: OrganizationLookupFailedException
) -> JSONResponse:
    """Strict-mode lookup failures: 503 without backend details."""
    logger.error("Organization lookup failed (strict mode): %s", exc.details)
    return JSONResponse(
        status_code=503,
        content={"error": exc.error_code, "message": "Organization directory unavailable"},
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Return validation errors without non-serializable ctx values."""
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. More specific GeolabException
    subclasses are registered alongside the base class; Starlette picks the
    closest match in the exception's MRO.
    """
    app.add_exception_handler(AuthorizationException, _authorization_exception_handler)
    app.add_exception_handler(UnknownRoleException, _unknown_role_handler)
    app.add_exception_handler(OrganizationLookupFailedException, _lookup_failed_handler)
    app.add_exception_handler(GeolabException, _geolab_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
