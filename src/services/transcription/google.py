"""Google Cloud Speech-to-Text provider (v1 REST ``speech:recognize``).

Forwards the client's base64 audio and recognition config unchanged in
the service's native request shape. There are no retries: a single
failure is surfaced to the relay caller, who decides whether to retry.
"""

import logging

import httpx

from src.core.config import get_settings
from src.core.exceptions import ConfigurationError, UpstreamError, UpstreamTimeoutError
from src.core.models import RecognitionConfig
from src.services.transcription.base import BaseRecognizer

logger = logging.getLogger(__name__)


class GoogleSpeechRecognizer(BaseRecognizer):
    """Recognizer backed by the Google Cloud Speech-to-Text REST API.

    Args:
        api_key: Google API key (falls back to settings if not provided).
        endpoint: ``speech:recognize`` URL (falls back to settings).
        timeout: Upstream request timeout in seconds.
        client: Optional pre-built ``httpx.AsyncClient`` (tests inject a
            ``MockTransport`` here).
    """

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.google_api_key
        self._endpoint = endpoint or settings.google_stt_endpoint
        self._timeout = timeout if timeout is not None else settings.upstream_timeout
        self._client = client

    @staticmethod
    def build_request_body(audio_content: str, config: RecognitionConfig) -> dict:
        """Translate the relay payload into the service's request shape."""
        return {"config": config.to_wire(), "audio": {"content": audio_content}}

    async def recognize(self, audio_content: str, config: RecognitionConfig) -> dict:
        if not self._api_key:
            raise ConfigurationError("GOOGLE_API_KEY must be set to use the google recognizer")

        body = self.build_request_body(audio_content, config)
        try:
            if self._client is not None:
                resp = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await self._post(client, body)
        except httpx.TimeoutException as exc:
            logger.warning("Speech API timed out after %.1fs", self._timeout)
            raise UpstreamTimeoutError() from exc
        except httpx.HTTPError as exc:
            logger.warning("Speech API request failed: %s", exc)
            raise UpstreamError(f"Speech API request failed: {exc}") from exc

        if resp.is_error:
            logger.warning("Speech API returned HTTP %d: %s", resp.status_code, resp.text[:500])
            raise UpstreamError(f"Speech API returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError("Speech API returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise UpstreamError("Speech API returned an unexpected body")

        # An empty object means no speech was recognized
        return {"results": data.get("results") or []}

    async def _post(self, client: httpx.AsyncClient, body: dict) -> httpx.Response:
        return await client.post(
            self._endpoint,
            params={"key": self._api_key},
            json=body,
            timeout=self._timeout,
        )
