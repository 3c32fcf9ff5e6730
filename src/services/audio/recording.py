"""Recording handles.

A handle moves through ``new -> recording -> stopped`` exactly once and
is then thrown away; callers create a fresh handle for the next clip
instead of restarting an old one.
"""

import logging
import tempfile
from abc import ABC, abstractmethod
from enum import StrEnum
from pathlib import Path

from src.core.exceptions import CaptureError
from src.services.audio.processor import AudioProcessor

logger = logging.getLogger(__name__)


class StopOutcome(StrEnum):
    """Result of ``Recording.stop()``."""

    stopped_now = "stopped_now"
    already_stopped = "already_stopped"
    never_started = "never_started"


class Recording(ABC):
    """Single-use handle for one captured clip.

    Subclasses implement ``_begin`` (start the audio backend) and
    ``_finish`` (stop it and return the finalized file's URI).
    """

    def __init__(self) -> None:
        self._started = False
        self._stopped = False
        self._uri: str | None = None

    @property
    def is_recording(self) -> bool:
        return self._started and not self._stopped

    @property
    def uri(self) -> str | None:
        """URI of the finalized clip, available after a successful stop."""
        return self._uri

    def start(self) -> None:
        """Begin recording.

        Raises:
            CaptureError: The handle was already used, or the backend refused.
        """
        if self._started:
            raise CaptureError("Recording handle has already been started")
        try:
            self._begin()
        except CaptureError:
            raise
        except Exception as exc:
            raise CaptureError(f"Audio backend refused to start: {exc}") from exc
        self._started = True

    def stop(self) -> StopOutcome:
        """Stop recording and finalize the clip. Safe to call more than once.

        Raises:
            CaptureError: The backend failed while finalizing the clip.
        """
        if not self._started:
            return StopOutcome.never_started
        if self._stopped:
            return StopOutcome.already_stopped
        self._stopped = True
        try:
            self._uri = self._finish()
        except CaptureError:
            raise
        except Exception as exc:
            raise CaptureError(f"Audio backend failed to finalize the clip: {exc}") from exc
        return StopOutcome.stopped_now

    def discard(self) -> None:
        """Delete the finalized clip from disk, if any."""
        if self._uri is None:
            return
        Path(self._uri).unlink(missing_ok=True)
        self._uri = None

    @abstractmethod
    def _begin(self) -> None: ...

    @abstractmethod
    def _finish(self) -> str | None: ...


def _temp_clip_path(suffix: str) -> str:
    with tempfile.NamedTemporaryFile(prefix="clip-", suffix=suffix, delete=False) as f:
        return f.name


class ClipRecording(Recording):
    """Handle for audio captured by someone else (e.g. a browser widget).

    Bytes handed to ``feed()`` while recording are written to a temporary
    file when the handle is stopped.
    """

    def __init__(self, suffix: str = ".wav") -> None:
        super().__init__()
        self._suffix = suffix
        self._chunks: list[bytes] = []

    def feed(self, data: bytes) -> None:
        if not self.is_recording:
            raise CaptureError("Cannot feed audio into a handle that is not recording")
        self._chunks.append(data)

    def _begin(self) -> None:
        self._chunks.clear()

    def _finish(self) -> str | None:
        path = _temp_clip_path(self._suffix)
        Path(path).write_bytes(b"".join(self._chunks))
        self._chunks.clear()
        return path


class MicrophoneRecording(Recording):
    """Handle that records 16-bit mono PCM from the default input device via PyAudio.

    Args:
        sample_rate: Capture rate in Hz; should match the platform's
            recognition config.
        device_index: PyAudio input device index (None = system default).
    """

    BUFFER_SIZE = 1024

    def __init__(self, sample_rate: int = 44100, device_index: int | None = None) -> None:
        super().__init__()
        self._processor = AudioProcessor(sample_rate=sample_rate)
        self._device_index = device_index
        self._frames: list[bytes] = []
        self._audio = None
        self._stream = None

    def _callback(self, in_data, frame_count, time_info, status):  # noqa: ARG002
        self._frames.append(in_data)
        return (None, self._pyaudio.paContinue)

    def _begin(self) -> None:
        import pyaudio

        self._pyaudio = pyaudio
        self._audio = pyaudio.PyAudio()
        try:
            self._stream = self._audio.open(
                format=pyaudio.paInt16,
                channels=self._processor.channels,
                rate=self._processor.sample_rate,
                input=True,
                frames_per_buffer=self.BUFFER_SIZE,
                input_device_index=self._device_index,
                stream_callback=self._callback,
            )
        except Exception:
            self._audio.terminate()
            self._audio = None
            raise
        logger.info(
            "Microphone recording started (device=%s, %d Hz)",
            self._device_index if self._device_index is not None else "default",
            self._processor.sample_rate,
        )

    def _finish(self) -> str | None:
        try:
            if self._stream is not None:
                if self._stream.is_active():
                    self._stream.stop_stream()
                self._stream.close()
        finally:
            self._stream = None
            if self._audio is not None:
                self._audio.terminate()
                self._audio = None

        if not self._frames:
            return None
        path = self._processor.save_wav(b"".join(self._frames), _temp_clip_path(".wav"))
        self._frames.clear()
        return path
