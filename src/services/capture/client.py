"""
Asynchronous HTTP client for the speech relay.

Every failure (timeout, connection, non-2xx, unparseable body) is logged
and reported as ``None`` so callers only ever deal with "transcript or
nothing".
"""

import asyncio
import logging

import httpx

from src.core.config import get_settings
from src.core.models import RecognitionConfig
from src.services.transcription import extract_transcript

logger = logging.getLogger(__name__)


class RelayClient:
    """Thin wrapper around ``httpx.AsyncClient`` for the relay's two endpoints.

    Args:
        url: Full URL of the relay's ``/speech-to-text`` endpoint.
        timeout: Upper bound in seconds for a whole request, connection
            included. Defaults to ``settings.stt_request_timeout``.
        client: Optional pre-built ``httpx.AsyncClient`` (tests inject a
            ``MockTransport`` here).
    """

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._timeout = get_settings().stt_request_timeout if timeout is None else timeout
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def health_url(self) -> str:
        return str(httpx.URL(self._url).join("/health"))

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.request(method, url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response | None:
        """Send a request bounded by ``self._timeout``; ``None`` on any transport failure."""
        try:
            return await asyncio.wait_for(
                self._send(method, url, **kwargs), timeout=self._timeout
            )
        except (TimeoutError, httpx.TimeoutException):
            logger.error("STT request to %s timed out after %.1fs", url, self._timeout)
        except httpx.HTTPError as exc:
            logger.error("STT request to %s failed: %s", url, exc)
        return None

    async def transcribe(self, audio_base64: str, config: RecognitionConfig) -> str | None:
        """POST a clip to the relay and decode the transcript.

        Returns:
            The transcript, or ``None`` when nothing usable came back.
        """
        logger.info("STT → %s", self._url)
        resp = await self._request(
            "POST",
            self._url,
            json={"audioUrl": audio_base64, "config": config.to_wire()},
        )
        if resp is None:
            return None

        if resp.is_error:
            logger.error("STT HTTP %d %s", resp.status_code, resp.text[:500])
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.error("STT relay returned a non-JSON body")
            return None
        return extract_transcript(data)

    async def health(self) -> bool:
        """Return True when the relay answers ``GET /health`` with ``ok``."""
        resp = await self._request("GET", self.health_url)
        if resp is None or resp.is_error:
            return False
        try:
            return resp.json().get("ok") is True
        except (ValueError, AttributeError):
            return False
