"""Error Handlers — global exception handlers for the vault API.

Invariants:
    - VaultError → 400 text/plain, body is the fixed message of its kind
    - RequestValidationError / framework 400 → 400 "Bad request"
    - Exception (catch-all) → 400 "Internal server error", never leaks internal details
    - Integrity violations logged at CRITICAL, distinct from ordinary failures

Design Decisions:
    - Every failure collapses to 400: clients learn nothing about internal state
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hexvault.core.errors import VaultError, ErrorSeverity, ERROR_MESSAGES, ErrorKind

logger = logging.getLogger(__name__)

BAD_REQUEST_MESSAGE = "Bad request"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_vault_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_vault_error_handler(app: FastAPI) -> None:

    @app.exception_handler(VaultError)
    async def vault_error_handler(request: Request, exc: VaultError):
        """Handle all guard and repository errors."""
        level = (
            logging.CRITICAL if exc.kind is ErrorKind.INTERNAL_ERROR
            else logging.ERROR if exc.severity is ErrorSeverity.CRITICAL
            else logging.INFO
        )
        logger.log(
            level,
            f"VaultError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return PlainTextResponse(exc.to_response(), status_code=exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Requests the guards cannot even parse."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return PlainTextResponse(
            BAD_REQUEST_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST,
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def bad_request_handler(request: Request, exc: StarletteHTTPException):
        """Framework-raised 400s get the plain "Bad request" body; others pass through."""
        if exc.status_code == status.HTTP_400_BAD_REQUEST:
            return PlainTextResponse(
                BAD_REQUEST_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST,
            )
        return await http_exception_handler(request, exc)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return PlainTextResponse(
            ERROR_MESSAGES[ErrorKind.INTERNAL_ERROR],
            status_code=status.HTTP_400_BAD_REQUEST,
        )
