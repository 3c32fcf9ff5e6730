"""
Request body size limit for the relay.

Clients send whole clips as base64 JSON, so bodies are large but bounded.
POSTs whose ``Content-Length`` exceeds ``settings.max_request_bytes`` are
rejected before the body is read. Bodies without a declared length
(chunked uploads) are buffered up to the limit and then replayed to the
app, or rejected as soon as they cross it.
"""

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.api.middleware.error_handler import error_response
from src.core.config import get_settings
from src.core.exceptions import RequestTooLargeError


class BodySizeLimitMiddleware:
    """Return 413 for POST bodies larger than the configured limit."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "POST":
            await self.app(scope, receive, send)
            return

        limit = get_settings().max_request_bytes
        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > limit:
                await error_response(RequestTooLargeError(limit))(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        body = bytearray()
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body.extend(message.get("body", b""))
            if len(body) > limit:
                await error_response(RequestTooLargeError(limit))(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if replayed:
                return await receive()
            replayed = True
            return {"type": "http.request", "body": bytes(body), "more_body": False}

        await self.app(scope, replay, send)
