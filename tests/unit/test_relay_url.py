"""Tests for relay URL resolution."""

import pytest

from src.core.exceptions import ConfigurationError
from src.core.models import Platform
from src.services.capture.relay_url import resolve_relay_url


def test_configured_url_is_used_verbatim(make_settings):
    settings = make_settings(stt_relay_url="https://stt.example.com/speech-to-text")
    assert resolve_relay_url(settings, Platform.android) == "https://stt.example.com/speech-to-text"


def test_configured_url_wins_in_production(make_settings):
    settings = make_settings(environment="production", stt_relay_url="https://stt.example.com/x")
    assert resolve_relay_url(settings, Platform.web) == "https://stt.example.com/x"


@pytest.mark.parametrize("url", ["", "   "])
def test_production_without_url_fails(make_settings, url):
    settings = make_settings(environment="production", stt_relay_url=url, local_dev_ip="10.0.0.5")
    with pytest.raises(ConfigurationError, match="STT_RELAY_URL"):
        resolve_relay_url(settings, Platform.default, is_device=True)


def test_android_emulator_uses_host_loopback(make_settings):
    settings = make_settings()
    assert resolve_relay_url(settings, Platform.android) == "http://10.0.2.2:4000/speech-to-text"


def test_physical_device_uses_lan_ip(make_settings):
    settings = make_settings(local_dev_ip="192.168.1.20", relay_port=5000)
    assert (
        resolve_relay_url(settings, Platform.android, is_device=True)
        == "http://192.168.1.20:5000/speech-to-text"
    )


def test_physical_device_without_lan_ip_uses_localhost(make_settings):
    settings = make_settings()
    assert (
        resolve_relay_url(settings, Platform.default, is_device=True)
        == "http://localhost:4000/speech-to-text"
    )


def test_desktop_development_uses_localhost(make_settings):
    settings = make_settings(local_dev_ip="192.168.1.20")
    assert resolve_relay_url(settings, Platform.web) == "http://localhost:4000/speech-to-text"
