"""
Audio module - clip conversion and recording handles.
"""

from .processor import AudioProcessor
from .recording import ClipRecording, MicrophoneRecording, Recording, StopOutcome

__all__ = ["AudioProcessor", "ClipRecording", "MicrophoneRecording", "Recording", "StopOutcome"]
