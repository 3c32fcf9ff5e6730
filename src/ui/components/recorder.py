"""
Recorder component — language inputs, clip capture, and transcript display.

States: idle -> recording -> transcribing -> idle. The browser widget does
the recording; each new clip is fed into the current capture handle and
transcribed once.
"""

import asyncio
import logging

import streamlit as st

from src.core.config import Settings
from src.core.models import Platform
from src.services.audio import AudioProcessor, ClipRecording
from src.services.capture import RelayClient, SpeechCapture, audio_format_for

logger = logging.getLogger(__name__)

PLACEHOLDER = "Your transcribed text will be shown here"

# st.audio_input delivers WAV, so clips go out as uncompressed PCM.
UI_PLATFORM = Platform.default


def _get_capture(settings: Settings, relay_url: str) -> SpeechCapture:
    """Return the session's capture pipeline, creating it on first use."""
    capture = st.session_state.get("capture")
    if capture is None:
        capture = SpeechCapture(
            ClipRecording,
            platform=UI_PLATFORM,
            settings=settings,
            relay=RelayClient(relay_url, timeout=settings.stt_request_timeout),
        )
        st.session_state.capture = capture
    return capture


def _transcribe_clip(capture: SpeechCapture, audio_bytes: bytes) -> str | None:
    """Run one capture cycle over an already-recorded clip."""
    processor = AudioProcessor(sample_rate=audio_format_for(capture.platform).sample_rate_hertz)
    try:
        wav = processor.to_linear16_wav(audio_bytes)
    except (RuntimeError, ValueError) as exc:
        logger.error("Could not decode recorded clip: %s", exc)
        return None

    if not capture.start_capture():
        return None
    capture.recording.feed(wav)
    return asyncio.run(
        capture.stop_capture_and_transcribe(
            st.session_state.primary_language,
            st.session_state.alt_languages_csv,
        )
    )


def render_recorder(settings: Settings, relay_url: str) -> None:
    """Render the language inputs, the microphone widget, and the transcript."""
    st.text_input(
        "Primary language (BCP-47, e.g. en-US, fr-FR):",
        key="primary_language",
        placeholder="e.g. en-US",
    )
    st.text_input(
        "Alternative languages (comma-separated, max 3):",
        key="alt_languages_csv",
        placeholder="e.g. fr-FR,de-DE,ar-SA",
    )

    capture = _get_capture(settings, relay_url)
    clip = st.audio_input("Hold to record", key="clip")

    if clip is not None and clip.file_id != st.session_state.last_clip_id:
        st.session_state.last_clip_id = clip.file_id
        with st.spinner("Transcribing..."):
            transcript = _transcribe_clip(capture, clip.getvalue())
        st.session_state.transcript = transcript or ""

    if st.session_state.transcript:
        st.markdown(st.session_state.transcript)
    else:
        st.markdown(f":gray[{PLACEHOLDER}]")
