"""
Capture → encode → relay pipeline.

``SpeechCapture`` owns the one active recording handle. States:
idle -> recording -> transcribing -> idle. After every transcription
attempt the handle is discarded and replaced by a fresh one, whether a
transcript came back or not.
"""

import logging
from collections.abc import Callable, Iterable
from enum import StrEnum

from src.core.config import Settings, get_settings
from src.core.exceptions import CaptureError
from src.core.models import Platform
from src.services.audio.recording import Recording, StopOutcome
from src.services.capture.client import RelayClient
from src.services.capture.encoding import build_recognition_config, detect_platform
from src.services.capture.payload import read_audio_as_base64
from src.services.capture.relay_url import resolve_relay_url

logger = logging.getLogger(__name__)


class CaptureState(StrEnum):
    """Client-visible capture states."""

    idle = "idle"
    recording = "recording"
    transcribing = "transcribing"


class SpeechCapture:
    """Records one clip at a time and turns it into a transcript via the relay.

    Args:
        recording_factory: Creates a fresh, unstarted recording handle.
        platform: Capture platform; detected from settings / the OS if omitted.
        settings: Optional Settings instance (defaults to get_settings()).
        relay: Optional pre-built relay client. When omitted the relay URL
            is resolved from settings on every transcription attempt.
        is_device: Running on a physical device rather than an emulator or
            the relay's own host (defaults to ``settings.capture_is_device``).
    """

    def __init__(
        self,
        recording_factory: Callable[[], Recording],
        platform: Platform | None = None,
        settings: Settings | None = None,
        relay: RelayClient | None = None,
        is_device: bool | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._platform = platform or detect_platform(self._settings.capture_platform)
        self._factory = recording_factory
        self._relay = relay
        self._is_device = self._settings.capture_is_device if is_device is None else is_device
        self._recording = recording_factory()
        self._state = CaptureState.idle

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def recording(self) -> Recording:
        """The current handle. Replaced after every transcription attempt."""
        return self._recording

    def start_capture(self) -> bool:
        """Begin recording into the current handle.

        Returns:
            True if recording started; False (logged) if it was refused.
        """
        if self._state is not CaptureState.idle:
            logger.warning("Cannot start capture while %s", self._state)
            return False
        try:
            self._recording.start()
        except CaptureError as exc:
            logger.error("Failed to start recording: %s", exc.detail)
            return False
        self._state = CaptureState.recording
        return True

    async def stop_capture_and_transcribe(
        self,
        language_code: str | None = None,
        alternative_language_codes: Iterable[str] | str | None = None,
    ) -> str | None:
        """Stop the active recording and return its transcript.

        Args:
            language_code: Primary BCP-47 tag (defaults to settings).
            alternative_language_codes: Up to three extra tags; ``None``
                uses the settings default, an empty list sends none.

        Returns:
            The transcript, or ``None`` on any capture, encoding, network,
            or upstream failure.

        Raises:
            ConfigurationError: No relay address is configured in production.
                Raised before any network call is attempted.
        """
        if self._state is not CaptureState.recording:
            logger.warning("Stop requested while %s; nothing to transcribe", self._state)
            return None

        self._state = CaptureState.transcribing
        try:
            relay = self._relay or RelayClient(
                resolve_relay_url(self._settings, self._platform, self._is_device),
                timeout=self._settings.stt_request_timeout,
            )
            return await self._transcribe(relay, language_code, alternative_language_codes)
        finally:
            self._replace_recording()
            self._state = CaptureState.idle

    async def _transcribe(
        self,
        relay: RelayClient,
        language_code: str | None,
        alternative_language_codes: Iterable[str] | str | None,
    ) -> str | None:
        recording = self._recording
        try:
            outcome = recording.stop()
        except CaptureError as exc:
            logger.error("Failed to stop recording: %s", exc.detail)
            return None
        if outcome is not StopOutcome.stopped_now:
            logger.debug("Recording stop returned %s", outcome)

        uri = recording.uri
        if not uri:
            logger.error("Recording produced no audio file")
            return None

        try:
            audio_base64 = read_audio_as_base64(uri)
        except CaptureError as exc:
            logger.error("Failed to read recording: %s", exc.detail)
            return None
        if not audio_base64:
            logger.error("Recording is empty; skipping transcription")
            return None

        if alternative_language_codes is None:
            alternative_language_codes = self._settings.default_alternative_language_codes
        try:
            config = build_recognition_config(
                self._platform,
                language_code or self._settings.default_language_code,
                alternative_language_codes,
            )
        except ValueError as exc:
            logger.error("Invalid recognition config: %s", exc)
            return None

        return await relay.transcribe(audio_base64, config)

    def _replace_recording(self) -> None:
        old = self._recording
        self._recording = self._factory()
        if old.is_recording:
            try:
                old.stop()
            except CaptureError as exc:
                logger.warning("Failed to stop abandoned recording: %s", exc.detail)
        try:
            old.discard()
        except OSError as exc:
            logger.warning("Could not delete recorded clip %s: %s", old.uri, exc)
