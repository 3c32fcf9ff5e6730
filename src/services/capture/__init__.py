"""
Capture module - record a clip, encode it, and transcribe it through the relay.
"""

from .capture import CaptureState, SpeechCapture
from .client import RelayClient
from .encoding import (
    PLATFORM_AUDIO_FORMATS,
    audio_format_for,
    build_recognition_config,
    detect_platform,
    normalize_alternative_languages,
)
from .payload import encode_audio, read_audio_as_base64
from .relay_url import resolve_relay_url

__all__ = [
    "PLATFORM_AUDIO_FORMATS",
    "CaptureState",
    "RelayClient",
    "SpeechCapture",
    "audio_format_for",
    "build_recognition_config",
    "detect_platform",
    "encode_audio",
    "normalize_alternative_languages",
    "read_audio_as_base64",
    "resolve_relay_url",
]
