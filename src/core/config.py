"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SpeechRelay settings loaded from environment / .env file.

    The same settings object serves both sides of the wire: the relay
    server reads the ``app_*`` / upstream fields, the capture client reads
    the ``stt_*`` / ``local_dev_ip`` / ``capture_*`` fields.

    Attributes:
        environment: "development" allows a local relay fallback,
            "production" requires ``stt_relay_url``.
        recognizer_provider: Upstream recognition backend ("google").
        relay_response_shape: "text" returns ``{text}``, "results" returns
            the upstream ``{results}`` list unchanged.
        stt_relay_url: Full URL of the relay's ``/speech-to-text`` endpoint.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    environment: str = "development"

    # --- Relay server ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 4000
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    max_request_bytes: int = 50 * 1024 * 1024  # base64 audio is ~4/3 of the clip size
    relay_response_shape: str = "text"

    # --- Upstream recognition service ---
    recognizer_provider: str = "google"
    google_api_key: str = ""  # Required when recognizer_provider="google"
    google_stt_endpoint: str = "https://speech.googleapis.com/v1/speech:recognize"
    upstream_timeout: float = 30.0

    # --- Capture client ---
    stt_relay_url: str = ""  # Required when environment="production"
    local_dev_ip: str = ""  # LAN address of a dev relay, used from physical devices
    relay_port: int = 4000
    stt_request_timeout: float = 10.0
    capture_platform: str = ""  # Empty = detect from the running OS
    capture_is_device: bool = False  # Physical device (vs emulator / same host as the relay)
    default_language_code: str = "en-US"
    default_alternative_language_codes: list[str] = ["fr-FR", "de-DE", "ar-SA"]

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
