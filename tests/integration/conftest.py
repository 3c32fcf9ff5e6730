"""Integration test fixtures for the relay.

Provides an async HTTP client against a fresh app whose recognizer is
replaced by the shared ``mock_recognizer`` fixture.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.api.routes.speech import get_recognizer


@pytest.fixture
def app(mock_recognizer):
    """Create a fresh FastAPI application wired to the mock recognizer."""
    app = create_app()
    app.dependency_overrides[get_recognizer] = lambda: mock_recognizer
    return app


@pytest.fixture
async def async_client(app):
    """AsyncClient that returns 500 responses instead of re-raising app errors."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def speech_body():
    """A valid POST /speech-to-text body."""
    return {
        "audioUrl": "UklGRgAAAABXQVZF",
        "config": {
            "encoding": "LINEAR16",
            "sampleRateHertz": 44100,
            "languageCode": "en-US",
            "alternativeLanguageCodes": ["fr-FR"],
            "enableAutomaticPunctuation": True,
        },
    }
