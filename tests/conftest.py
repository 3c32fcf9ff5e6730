"""Shared pytest fixtures for the SpeechRelay test suite.

Provides settings built without reading ``.env``, a mock recognizer, and
small WAV clips for the capture pipeline.
"""

import io
import math
import struct
import wave
from unittest.mock import AsyncMock

import pytest

from src.core.config import Settings

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def make_settings():
    """Factory for ``Settings`` that ignores the developer's ``.env`` file.

    Returns:
        Callable[..., Settings]: Accepts field overrides as keyword arguments.
    """

    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def settings(make_settings):
    """Development settings with a fixed relay URL."""
    return make_settings(stt_relay_url="http://relay.test/speech-to-text")


# ---------------------------------------------------------------------------
# Recognizer Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_recognizer():
    """Create a mock recognizer returning two recognized segments.

    Returns:
        AsyncMock: A mock implementing the BaseRecognizer interface.
    """
    from src.services.transcription.base import BaseRecognizer

    recognizer = AsyncMock(spec=BaseRecognizer)
    recognizer.recognize.return_value = {
        "results": [
            {"alternatives": [{"transcript": "hi", "confidence": 0.9}]},
            {"alternatives": [{"transcript": "there"}]},
        ]
    }
    return recognizer


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_pcm_bytes():
    """Generate 0.5 second of 440Hz sine-wave PCM audio (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    sample_rate = 16000
    amplitude = 16000  # ~50% of max int16
    return b"".join(
        struct.pack("<h", int(amplitude * math.sin(2 * math.pi * 440.0 * i / sample_rate)))
        for i in range(sample_rate // 2)
    )


@pytest.fixture
def sample_wav_bytes(sample_pcm_bytes):
    """Wrap ``sample_pcm_bytes`` in a WAV container.

    Returns:
        bytes: WAV file contents.
    """
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(16000)
        wf.writeframes(sample_pcm_bytes)
    return buf.getvalue()
