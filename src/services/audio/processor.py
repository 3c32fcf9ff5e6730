"""Audio processing utilities for captured clips.

Normalizes whatever the capture widget produced into mono 16-bit PCM
WAV at the sample rate the recognition config announces, and writes raw
PCM from the microphone to WAV files.
"""

import io
import wave
from pathlib import Path

import numpy as np
import soundfile as sf


class AudioProcessor:
    """Handles PCM audio data conversion.

    Args:
        sample_rate: Target sample rate in Hz.
        sample_width: Bytes per sample (2 = 16-bit signed PCM).
        channels: Number of audio channels (1 = mono).
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        sample_width: int = 2,
        channels: int = 1,
    ) -> None:
        self.sample_rate = sample_rate
        self.sample_width = sample_width
        self.channels = channels

    def to_linear16_wav(self, audio_bytes: bytes) -> bytes:
        """Decode an audio file, downmix to mono, resample, and re-encode as PCM_16 WAV.

        Args:
            audio_bytes: Contents of any file format libsndfile can read.

        Returns:
            WAV file bytes at ``self.sample_rate``. Empty input yields ``b""``.
        """
        if not audio_bytes:
            return b""
        data, sample_rate = sf.read(io.BytesIO(audio_bytes), dtype="float32")

        if data.ndim > 1:
            data = data.mean(axis=1)

        # Linear-interpolation resample; speech tolerates it well enough
        if sample_rate != self.sample_rate and len(data):
            duration = len(data) / sample_rate
            num_samples = max(1, int(duration * self.sample_rate))
            indices = np.linspace(0, len(data) - 1, num_samples)
            data = np.interp(indices, np.arange(len(data)), data)

        out = io.BytesIO()
        sf.write(out, data, self.sample_rate, subtype="PCM_16", format="WAV")
        return out.getvalue()

    def save_wav(self, pcm_data: bytes, file_path: str | Path) -> str:
        """Write raw PCM bytes to a WAV file.

        Args:
            pcm_data: Raw PCM bytes (16-bit).
            file_path: Destination path for the WAV file.

        Returns:
            The absolute path to the saved file.
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with wave.open(str(path), "wb") as wf:
            wf.setnchannels(self.channels)
            wf.setsampwidth(self.sample_width)
            wf.setframerate(self.sample_rate)
            wf.writeframes(pcm_data)
        return str(path.resolve())
