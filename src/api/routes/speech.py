"""
Speech-to-text relay endpoint.

Accepts ``{audioUrl, config}``, forwards it to the configured recognizer,
and normalizes the answer to ``{text}`` or ``{results}``. Each request is
independent; the recognizer is resolved per request through a dependency.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from src.core.config import get_settings
from src.core.exceptions import EncodingError
from src.core.models import (
    RecognitionResultsResponse,
    SpeechToTextRequest,
    TranscriptResponse,
)
from src.services.transcription import BaseRecognizer, create_recognizer, join_results

logger = logging.getLogger(__name__)

router = APIRouter(tags=["speech"])


def get_recognizer() -> BaseRecognizer:
    """Build the recognizer selected by ``settings.recognizer_provider``."""
    return create_recognizer(get_settings().recognizer_provider)


def normalize_recognition(data: dict, shape: str) -> TranscriptResponse | RecognitionResultsResponse:
    """Map a recognizer answer to the response shape clients expect.

    A flat ``text`` answer is always passed through as ``{text}``. A
    ``results`` answer is flattened unless ``shape`` is "results".
    """
    text = data.get("text")
    if isinstance(text, str):
        return TranscriptResponse(text=text)

    results = data.get("results") or []
    if shape == "results":
        return RecognitionResultsResponse.model_validate({"results": results})
    return TranscriptResponse(text=join_results(results))


@router.post("/speech-to-text", response_model=None)
async def speech_to_text(
    body: SpeechToTextRequest,
    recognizer: Annotated[BaseRecognizer, Depends(get_recognizer)],
) -> dict:
    """Recognize speech in a base64 clip via the upstream service."""
    if not body.audio_url.strip():
        raise EncodingError("audioUrl must contain base64 audio")

    logger.info(
        "Forwarding %d base64 chars (%s @ %d Hz, %s)",
        len(body.audio_url),
        body.config.encoding,
        body.config.sample_rate_hertz,
        body.config.language_code,
    )
    data = await recognizer.recognize(body.audio_url, body.config)
    response = normalize_recognition(data, get_settings().relay_response_shape)
    return response.model_dump(exclude_none=True)
