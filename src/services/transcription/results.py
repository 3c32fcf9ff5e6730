"""Flatten recognition responses into a single transcript string.

Both the relay (normalizing upstream answers) and the capture client
(decoding relay answers) go through these helpers, so the two sides
agree on which response shapes are accepted.
"""

from collections.abc import Iterable
from typing import Any


def join_results(results: Iterable[Any] | None) -> str:
    """Join the first alternative of each segment with single spaces.

    Segments without alternatives, or whose first alternative has no
    transcript, are skipped.
    """
    parts: list[str] = []
    for segment in results or []:
        if not isinstance(segment, dict):
            continue
        alternatives = segment.get("alternatives") or []
        if not alternatives or not isinstance(alternatives[0], dict):
            continue
        transcript = alternatives[0].get("transcript")
        if isinstance(transcript, str) and transcript.strip():
            parts.append(transcript.strip())
    return " ".join(parts).strip()


def extract_transcript(payload: Any) -> str | None:
    """Decode a ``{text}`` or ``{results}`` payload.

    ``text`` wins when both keys are present. An empty transcript is
    reported as ``None`` so callers have a single "nothing recognized" value.
    """
    if not isinstance(payload, dict):
        return None
    text = payload.get("text")
    if isinstance(text, str):
        return text if text.strip() else None
    results = payload.get("results")
    if isinstance(results, list):
        return join_results(results) or None
    return None
