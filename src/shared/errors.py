"""Error taxonomy and HTTP mapping for storefront services.

Protean's own exceptions (``ValidationError``, ``ObjectNotFoundError``) are
raised by aggregates and repositories; the classes below cover what Protean has
no notion of: bearer tokens, permissions, stale writes and unreachable peers.
Every handler answers with a JSON body of the form ``{"error": ...}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

logger = structlog.get_logger(__name__)


class StorefrontError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(StorefrontError):
    """Missing, expired or tampered bearer token."""

    status_code = 401


class PermissionDeniedError(StorefrontError):
    status_code = 403


class StaleRevisionError(StorefrontError):
    """A conditional update was attempted against an outdated revision."""

    status_code = 409

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Revision mismatch: expected {expected}, found {actual}")
        self.expected = expected
        self.actual = actual


class ServiceUnavailableError(StorefrontError):
    """The registry or a downstream service could not be reached."""

    status_code = 503


def _request_validation_messages(exc: RequestValidationError) -> dict[str, list[str]]:
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the "body"/"query"/"path" location prefix
        location = [str(part) for part in error.get("loc", ())[1:]] or ["request"]
        messages.setdefault(".".join(location), []).append(error.get("msg", "Invalid value"))
    return messages


def register_error_handlers(app: FastAPI) -> None:
    """Install the storefront exception handlers on ``app``.

    Protean's handlers are registered first; the ones below take precedence for
    the exception types they name.
    """
    register_exception_handlers(app)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.messages})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _request_validation_messages(exc)})

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": getattr(exc, "messages", None) or str(exc)})

    @app.exception_handler(StorefrontError)
    async def handle_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("Request failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
