"""
Pydantic v2 request / response models shared by the relay and the capture client.

Wire fields are camelCase to match the recognition service's REST shape;
Python attributes stay snake_case via aliases.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    ok: bool = True


# ---------------------------------------------------------------------------
# Platform / encoding
# ---------------------------------------------------------------------------


class Platform(StrEnum):
    """Capture targets that decide the audio codec."""

    web = "web"  # compressed web container
    android = "android"  # adaptive mobile codec
    default = "default"  # uncompressed PCM


class AudioEncoding(StrEnum):
    """Codec tags understood by the recognition service."""

    WEBM_OPUS = "WEBM_OPUS"
    AMR_WB = "AMR_WB"
    LINEAR16 = "LINEAR16"


@dataclass(frozen=True)
class AudioFormat:
    """A matched (encoding, sample rate) pair."""

    encoding: AudioEncoding
    sample_rate_hertz: int


# ---------------------------------------------------------------------------
# Recognition request
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecognitionConfig(_CamelModel):
    """How the recognition service should decode and interpret the audio.

    Keys this model does not declare (``model``, ``useEnhanced``, ...) are
    kept as sent and re-emitted by ``to_wire()``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    encoding: AudioEncoding
    sample_rate_hertz: int
    language_code: str
    alternative_language_codes: Annotated[list[str], Field(max_length=3)] | None = None
    enable_automatic_punctuation: bool = True

    @field_validator("language_code")
    @classmethod
    def _language_code_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("languageCode must not be blank")
        return value

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, omitting an absent alternatives list."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class SpeechToTextRequest(_CamelModel):
    """POST /speech-to-text request body.

    ``audio_url`` carries the base64-encoded audio bytes, not a URL; the
    field name is kept for wire compatibility with existing clients.
    """

    audio_url: str
    config: RecognitionConfig


# ---------------------------------------------------------------------------
# Recognition response
# ---------------------------------------------------------------------------


class TranscriptResponse(BaseModel):
    """Flattened transcript returned to the client."""

    text: str


class SpeechAlternative(BaseModel):
    """One candidate transcript for a segment."""

    transcript: str = ""
    confidence: float | None = None


class SpeechSegmentResult(BaseModel):
    """One recognized segment with its ordered alternatives."""

    alternatives: list[SpeechAlternative] = Field(default_factory=list)


class RecognitionResultsResponse(BaseModel):
    """Upstream-style ``{results: [...]}`` response."""

    results: list[SpeechSegmentResult] = Field(default_factory=list)
