"""
Abstract base class for speech recognition backends.

The relay talks to exactly one recognizer per request; implementations
must not keep per-request state on the instance.
"""

from abc import ABC, abstractmethod

from src.core.models import RecognitionConfig


class BaseRecognizer(ABC):
    """Interface that every recognition provider must implement."""

    @abstractmethod
    async def recognize(self, audio_content: str, config: RecognitionConfig) -> dict:
        """Recognize speech in base64-encoded audio.

        Args:
            audio_content: Base64 audio bytes, passed through unchanged.
            config: Recognition parameters chosen by the client.

        Returns:
            Dict with either a ``text`` string or a ``results`` list of
            ``{"alternatives": [{"transcript": ...}, ...]}`` segments.

        Raises:
            UpstreamError: The service failed or answered with an unusable body.
            UpstreamTimeoutError: The service did not answer in time.
        """
