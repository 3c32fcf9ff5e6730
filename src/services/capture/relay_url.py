"""Resolve where the capture client sends its clips."""

import logging

from src.core.config import Settings
from src.core.exceptions import ConfigurationError
from src.core.models import Platform

logger = logging.getLogger(__name__)

ANDROID_EMULATOR_HOST = "10.0.2.2"  # host loopback as seen from the Android emulator
SPEECH_TO_TEXT_PATH = "/speech-to-text"


def resolve_relay_url(settings: Settings, platform: Platform, is_device: bool = False) -> str:
    """Return the relay's ``/speech-to-text`` URL.

    ``STT_RELAY_URL`` is used as given when set. In production its absence
    is an error; in development the URL falls back to a local relay on
    ``relay_port``.

    Raises:
        ConfigurationError: Production settings without ``STT_RELAY_URL``.
    """
    configured = settings.stt_relay_url.strip()
    if configured:
        return configured

    if settings.is_production:
        raise ConfigurationError("STT_RELAY_URL must be set in production")

    if platform is Platform.android and not is_device:
        host = ANDROID_EMULATOR_HOST
    elif is_device:
        host = settings.local_dev_ip.strip() or "localhost"
    else:
        host = "localhost"
    url = f"http://{host}:{settings.relay_port}{SPEECH_TO_TEXT_PATH}"
    logger.debug("No STT_RELAY_URL configured, using development relay %s", url)
    return url
