"""Turn a finalized recording into the base64 string the relay expects."""

import base64
from pathlib import Path
from urllib.parse import unquote, urlparse

from src.core.exceptions import CaptureError

_DATA_URI_MARKER = "base64,"


def encode_audio(data: bytes) -> str:
    """Standard base64 of the raw audio bytes; empty input gives ``""``."""
    return base64.b64encode(data).decode("ascii")


def read_audio_as_base64(uri: str) -> str:
    """Read a recording URI into base64.

    Supports ``data:<mime>;base64,<payload>`` URIs (as produced by web
    blob readers), ``file://`` URIs and plain filesystem paths.

    Raises:
        CaptureError: The file does not exist or cannot be read.
    """
    if uri.startswith("data:"):
        _, _, payload = uri.partition(_DATA_URI_MARKER)
        return payload

    path = Path(unquote(urlparse(uri).path)) if uri.startswith("file://") else Path(uri)
    try:
        return encode_audio(path.read_bytes())
    except OSError as exc:
        raise CaptureError(f"Cannot read recording at {uri}: {exc}") from exc
