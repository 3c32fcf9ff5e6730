"""
SpeechRelay exception hierarchy.

All application-specific exceptions inherit from SpeechRelayError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class SpeechRelayError(Exception):
    """Base exception for all SpeechRelay errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "SPEECHRELAY_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class ConfigurationError(SpeechRelayError):
    """Raised when a required setting (relay URL, API key) is missing."""

    def __init__(self, detail: str = "Required configuration is missing") -> None:
        super().__init__(
            detail=detail,
            code="CONFIGURATION_ERROR",
            status_code=500,
        )


class CaptureError(SpeechRelayError):
    """Raised when the audio subsystem cannot produce a recording."""

    def __init__(self, detail: str = "Audio capture failed") -> None:
        super().__init__(
            detail=detail,
            code="CAPTURE_ERROR",
            status_code=500,
        )


class EncodingError(SpeechRelayError):
    """Raised when the submitted audio payload is empty or not base64."""

    def __init__(self, detail: str = "Audio payload is empty") -> None:
        super().__init__(
            detail=detail,
            code="ENCODING_ERROR",
            status_code=400,
        )


class UpstreamError(SpeechRelayError):
    """Raised when the recognition service fails or returns an unusable body."""

    def __init__(self, detail: str = "Speech recognition service failed") -> None:
        super().__init__(
            detail=detail,
            code="UPSTREAM_ERROR",
            status_code=502,
        )


class UpstreamTimeoutError(SpeechRelayError):
    """Raised when the recognition service does not answer in time."""

    def __init__(self, detail: str = "Speech recognition service timed out") -> None:
        super().__init__(
            detail=detail,
            code="UPSTREAM_TIMEOUT",
            status_code=504,
        )


class RequestTooLargeError(SpeechRelayError):
    """Raised when a request body exceeds ``max_request_bytes``."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            detail=f"Request body exceeds {limit} bytes",
            code="REQUEST_TOO_LARGE",
            status_code=413,
        )


class InvalidRequestError(SpeechRelayError):
    """Raised when a request body fails schema validation.

    ``errors`` holds one ``{"field", "message"}`` entry per problem, with
    field paths in the wire (camelCase) spelling.
    """

    def __init__(self, errors: list[dict] | None = None) -> None:
        self.errors = errors or []
        super().__init__(
            detail="Request body failed validation",
            code="VALIDATION_ERROR",
            status_code=422,
        )
