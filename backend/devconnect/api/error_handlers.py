"""Error Handlers — global exception handlers for the DevConnect API.

Invariants:
    - DevConnectError → its own envelope and status (errors[] or msg)
    - RequestValidationError → 400 with the same errors[] shape as rule failures
    - Exception (catch-all) → 500 {"msg": "Server error"}, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (DevConnectError), validation (Pydantic), catch-all (Exception)
    - Client errors log at warning, server errors at error with the hidden detail
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devconnect.core.errors import (
    DevConnectError, FieldFailure, ServerError, ValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register DevConnect domain/infrastructure error handler."""

    @app.exception_handler(DevConnectError)
    async def devconnect_error_handler(request: Request, exc: DevConnectError):
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "identity_id": exc.context.identity_id,
            "step": exc.context.step,
        }
        if isinstance(exc, ServerError):
            logger.error(f"ServerError: {exc.detail}", extra=extra)
        else:
            logger.warning(f"{type(exc).__name__}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"msg": "Server error"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Pydantic errors in the same errors[] envelope the field rules use."""
    failures = [
        FieldFailure(
            param=".".join(str(loc) for loc in e["loc"][1:]) or str(e["loc"][0]),
            msg=e["msg"],
            location=str(e["loc"][0]),
        )
        for e in exc.errors()
    ]
    return ValidationError(failures).to_response()
