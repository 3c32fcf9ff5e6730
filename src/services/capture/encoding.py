"""Recognition config construction.

The codec and sample rate always come from one row of
``PLATFORM_AUDIO_FORMATS``; callers only choose the languages.
"""

import logging
import sys
from collections.abc import Iterable

from src.core.exceptions import ConfigurationError
from src.core.models import AudioEncoding, AudioFormat, Platform, RecognitionConfig

logger = logging.getLogger(__name__)

MAX_ALTERNATIVE_LANGUAGES = 3

PLATFORM_AUDIO_FORMATS: dict[Platform, AudioFormat] = {
    Platform.web: AudioFormat(AudioEncoding.WEBM_OPUS, 48000),
    Platform.android: AudioFormat(AudioEncoding.AMR_WB, 16000),
    Platform.default: AudioFormat(AudioEncoding.LINEAR16, 44100),
}


def audio_format_for(platform: Platform | str) -> AudioFormat:
    """Return the (encoding, sample rate) pair for a platform.

    Unknown platform names get the uncompressed PCM default.
    """
    try:
        return PLATFORM_AUDIO_FORMATS[Platform(platform)]
    except ValueError:
        return PLATFORM_AUDIO_FORMATS[Platform.default]


def detect_platform(override: str = "") -> Platform:
    """Identify the capture platform of the running interpreter.

    Args:
        override: Explicit platform name (``CAPTURE_PLATFORM``); wins over detection.

    Raises:
        ConfigurationError: ``override`` is not a known platform.
    """
    if override:
        try:
            return Platform(override.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"CAPTURE_PLATFORM must be one of {[p.value for p in Platform]}, got {override!r}"
            ) from None
    if sys.platform in ("emscripten", "wasi"):
        return Platform.web
    if sys.platform == "android" or hasattr(sys, "getandroidapilevel"):
        return Platform.android
    return Platform.default


def normalize_alternative_languages(codes: Iterable[str] | str | None) -> list[str]:
    """Trim entries, drop blanks, keep at most three.

    Accepts a list or a comma-separated string such as ``"fr-FR, de-DE"``.
    """
    if codes is None:
        return []
    if isinstance(codes, str):
        codes = codes.split(",")
    cleaned = [code.strip() for code in codes if code and code.strip()]
    return cleaned[:MAX_ALTERNATIVE_LANGUAGES]


def build_recognition_config(
    platform: Platform | str,
    language_code: str,
    alternative_language_codes: Iterable[str] | str | None = None,
) -> RecognitionConfig:
    """Merge caller-chosen languages with the platform's audio format.

    ``alternativeLanguageCodes`` is left out entirely when no usable
    alternative remains after normalization.
    """
    fmt = audio_format_for(platform)
    alternatives = normalize_alternative_languages(alternative_language_codes)
    return RecognitionConfig(
        encoding=fmt.encoding,
        sample_rate_hertz=fmt.sample_rate_hertz,
        language_code=language_code.strip(),
        alternative_language_codes=alternatives or None,
        enable_automatic_punctuation=True,
    )
