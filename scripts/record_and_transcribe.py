#!/usr/bin/env python3
"""Record a short clip from the default microphone and print its transcript.

Usage:
    python scripts/record_and_transcribe.py [SECONDS] [LANGUAGE] [ALTERNATIVES]

    SECONDS defaults to 5, LANGUAGE to ``DEFAULT_LANGUAGE_CODE``, and
    ALTERNATIVES (comma-separated) to ``DEFAULT_ALTERNATIVE_LANGUAGE_CODES``.

Prerequisites:
    - Project installed with the ``mic`` extra (``pip install -e .[mic]``)
    - Run from the repository root directory
    - A relay running locally (``python -m src.api``) or ``STT_RELAY_URL`` set

The microphone always yields 16-bit PCM WAV, so clips are announced as
the ``default`` platform (LINEAR16) whatever ``CAPTURE_PLATFORM`` says.

Exits with status 1 when no transcript came back.
"""

import asyncio
import logging
import sys
from functools import partial

logger = logging.getLogger(__name__)


def build_capture(settings):
    """Wire a microphone-backed ``SpeechCapture`` whose config matches PCM WAV."""
    from src.core.models import Platform
    from src.services.audio import MicrophoneRecording
    from src.services.capture import SpeechCapture, audio_format_for

    if settings.capture_platform and settings.capture_platform != Platform.default:
        logger.warning(
            "Ignoring CAPTURE_PLATFORM=%s; microphone clips are LINEAR16 PCM",
            settings.capture_platform,
        )
    rate = audio_format_for(Platform.default).sample_rate_hertz
    return SpeechCapture(
        partial(MicrophoneRecording, sample_rate=rate),
        platform=Platform.default,
        settings=settings,
    )


async def _run(seconds: float, language: str | None, alternatives: str | None) -> int:
    from src.core.config import get_settings
    from src.core.utils import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level)
    capture = build_capture(settings)

    if not capture.start_capture():
        print("Could not start the microphone.", file=sys.stderr)
        return 1
    print(f"Recording for {seconds:g}s...")
    await asyncio.sleep(seconds)

    transcript = await capture.stop_capture_and_transcribe(language, alternatives)
    if transcript is None:
        print("No transcript.", file=sys.stderr)
        return 1
    print(transcript)
    return 0


def main() -> None:
    seconds = float(sys.argv[1]) if len(sys.argv) > 1 else 5.0
    language = sys.argv[2] if len(sys.argv) > 2 else None
    alternatives = sys.argv[3] if len(sys.argv) > 3 else None
    sys.exit(asyncio.run(_run(seconds, language, alternatives)))


if __name__ == "__main__":
    main()
