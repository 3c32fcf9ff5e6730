"""
Transcription module - speech recognition abstraction layer.

Factory function for creating recognizer instances based on provider configuration,
plus helpers for flattening recognition results into a transcript.
"""

from .base import BaseRecognizer
from .results import extract_transcript, join_results

__all__ = ["BaseRecognizer", "create_recognizer", "extract_transcript", "join_results"]


def create_recognizer(provider: str, **kwargs) -> BaseRecognizer:
    """
    Factory function to create a recognizer instance based on provider.

    Args:
        provider: Recognition provider name ("google")
        **kwargs: Provider-specific configuration

    Returns:
        BaseRecognizer implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "google":
        from .google import GoogleSpeechRecognizer
        return GoogleSpeechRecognizer(**kwargs)
    else:
        raise ValueError(f"Unknown recognizer provider: {provider}")
