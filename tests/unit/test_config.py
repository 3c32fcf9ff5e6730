"""Tests for Settings defaults and environment overrides."""

from src.core.config import Settings, get_settings


def test_defaults(make_settings):
    settings = make_settings()
    assert settings.app_port == 4000
    assert settings.stt_request_timeout == 10.0
    assert settings.relay_response_shape == "text"
    assert settings.cors_origins == ["*"]
    assert settings.stt_relay_url == ""
    assert settings.is_production is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("STT_RELAY_URL", "https://stt.example.com/speech-to-text")
    monkeypatch.setenv("LOCAL_DEV_IP", "192.168.1.20")
    monkeypatch.setenv("APP_PORT", "8080")
    monkeypatch.setenv("DEFAULT_ALTERNATIVE_LANGUAGE_CODES", '["es-ES"]')

    settings = Settings(_env_file=None)

    assert settings.is_production is True
    assert settings.stt_relay_url == "https://stt.example.com/speech-to-text"
    assert settings.local_dev_ip == "192.168.1.20"
    assert settings.app_port == 8080
    assert settings.default_alternative_language_codes == ["es-ES"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
