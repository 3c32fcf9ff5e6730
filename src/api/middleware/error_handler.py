"""
Error envelope for the relay.

Every failure leaves the relay as ``{detail, code, timestamp}`` JSON
(validation failures add an ``errors`` list). ``error_response`` builds
that envelope; the handlers below and ``BodySizeLimitMiddleware`` share it.
"""

import logging
from collections.abc import Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.exceptions import InvalidRequestError, SpeechRelayError

logger = logging.getLogger(__name__)


def error_response(exc: SpeechRelayError) -> JSONResponse:
    """Render a domain error as the relay's JSON envelope."""
    content = {"detail": exc.detail, "code": exc.code, "timestamp": exc.timestamp}
    if isinstance(exc, InvalidRequestError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


def _field_path(loc: Sequence) -> str:
    # Drop the leading "body"/"query" segment; aliases are already camelCase
    parts = loc[1:] if len(loc) > 1 else loc
    return ".".join(str(part) for part in parts)


def validation_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten FastAPI's validation report into ``{field, message}`` entries."""
    return [
        {"field": _field_path(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    """Attach the domain, validation, and catch-all handlers to ``app``."""

    @app.exception_handler(SpeechRelayError)
    async def speechrelay_error_handler(request: Request, exc: SpeechRelayError) -> JSONResponse:
        logger.warning("%s on %s: %s", exc.code, request.url.path, exc.detail)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = validation_errors(exc)
        logger.info("Rejected %s body: %s", request.url.path, errors)
        return error_response(InvalidRequestError(errors))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log the traceback server-side; the client only sees a generic 500."""
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(SpeechRelayError("Internal server error", "INTERNAL_ERROR", 500))
