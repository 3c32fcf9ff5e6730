"""Tests for the SpeechCapture pipeline: state machine, failure paths, handle replacement."""

import base64
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.exceptions import CaptureError, ConfigurationError
from src.core.models import AudioEncoding, Platform
from src.services.audio.recording import ClipRecording, Recording
from src.services.capture.capture import CaptureState, SpeechCapture
from src.services.capture.client import RelayClient


class _NoFileRecording(Recording):
    def _begin(self) -> None:
        pass

    def _finish(self) -> str | None:
        return None


class _RefusingRecording(Recording):
    def _begin(self) -> None:
        raise OSError("permission denied")

    def _finish(self) -> str | None:
        return None


@pytest.fixture
def relay():
    """Mock relay client that always recognizes 'hello world'."""
    client = MagicMock(spec=RelayClient)
    client.transcribe = AsyncMock(return_value="hello world")
    return client


@pytest.fixture
def capture(settings, relay):
    return SpeechCapture(ClipRecording, platform=Platform.android, settings=settings, relay=relay)


async def _record(capture: SpeechCapture, audio: bytes, **kwargs):
    assert capture.start_capture() is True
    capture.recording.feed(audio)
    return await capture.stop_capture_and_transcribe(**kwargs)


class TestHappyPath:
    async def test_returns_transcript(self, capture, relay):
        result = await _record(capture, b"audio-bytes", language_code="de-DE")

        assert result == "hello world"
        audio_b64, config = relay.transcribe.call_args.args
        assert base64.b64decode(audio_b64) == b"audio-bytes"
        assert config.encoding is AudioEncoding.AMR_WB
        assert config.sample_rate_hertz == 16000
        assert config.language_code == "de-DE"

    async def test_defaults_from_settings(self, capture, relay):
        await _record(capture, b"x")
        _, config = relay.transcribe.call_args.args
        assert config.language_code == "en-US"
        assert config.alternative_language_codes == ["fr-FR", "de-DE", "ar-SA"]

    async def test_explicit_empty_alternatives_are_omitted(self, capture, relay):
        await _record(capture, b"x", alternative_language_codes=[])
        _, config = relay.transcribe.call_args.args
        assert "alternativeLanguageCodes" not in config.to_wire()

    async def test_alternatives_truncated(self, capture, relay):
        await _record(capture, b"x", alternative_language_codes=" a, b ,, c, d")
        _, config = relay.transcribe.call_args.args
        assert config.alternative_language_codes == ["a", "b", "c"]


class TestStateMachine:
    def test_starts_idle(self, capture):
        assert capture.state is CaptureState.idle

    def test_start_moves_to_recording(self, capture):
        assert capture.start_capture() is True
        assert capture.state is CaptureState.recording

    def test_cannot_start_twice(self, capture):
        capture.start_capture()
        assert capture.start_capture() is False

    async def test_transcribing_state_during_request(self, capture, relay):
        states = []

        async def _transcribe(*_args):
            states.append(capture.state)
            return "ok"

        relay.transcribe.side_effect = _transcribe
        await _record(capture, b"x")
        assert states == [CaptureState.transcribing]
        assert capture.state is CaptureState.idle

    async def test_stop_while_idle_returns_none(self, capture, relay):
        assert await capture.stop_capture_and_transcribe() is None
        relay.transcribe.assert_not_called()

    def test_start_refused_is_logged_not_raised(self, settings, relay):
        capture = SpeechCapture(_RefusingRecording, platform=Platform.web, settings=settings, relay=relay)
        assert capture.start_capture() is False
        assert capture.state is CaptureState.idle


class TestFailures:
    async def test_empty_audio_short_circuits(self, capture, relay):
        assert await _record(capture, b"") is None
        relay.transcribe.assert_not_called()

    async def test_no_uri_short_circuits(self, settings, relay):
        capture = SpeechCapture(_NoFileRecording, platform=Platform.web, settings=settings, relay=relay)
        capture.start_capture()
        assert await capture.stop_capture_and_transcribe() is None
        relay.transcribe.assert_not_called()

    async def test_unreadable_file_is_none(self, capture, relay, monkeypatch):
        def _fail(_uri):
            raise CaptureError("gone")

        monkeypatch.setattr("src.services.capture.capture.read_audio_as_base64", _fail)
        assert await _record(capture, b"x") is None
        relay.transcribe.assert_not_called()

    async def test_relay_failure_is_none(self, capture, relay):
        relay.transcribe.return_value = None
        assert await _record(capture, b"x") is None

    async def test_blank_language_is_none(self, capture, relay):
        capture._settings = capture._settings.model_copy(update={"default_language_code": " "})
        assert await _record(capture, b"x", language_code="") is None
        relay.transcribe.assert_not_called()


class TestHandleReplacement:
    async def test_replaced_after_success(self, capture):
        first = capture.recording
        await _record(capture, b"x")
        assert capture.recording is not first
        assert capture.recording.is_recording is False
        assert capture.recording.uri is None

    async def test_replaced_after_failure(self, capture, relay):
        relay.transcribe.return_value = None
        first = capture.recording
        await _record(capture, b"x")
        assert capture.recording is not first

    async def test_clip_file_deleted(self, capture, relay):
        paths = []

        async def _transcribe(*_args):
            paths.append(Path(capture.recording.uri))
            return "ok"

        relay.transcribe.side_effect = _transcribe
        await _record(capture, b"x")
        assert paths and not paths[0].exists()

    async def test_next_capture_can_start_immediately(self, capture):
        await _record(capture, b"x")
        assert await _record(capture, b"y") == "hello world"


class TestConfiguration:
    async def test_production_without_relay_url_fails_fast(self, make_settings, monkeypatch):
        settings = make_settings(environment="production", stt_relay_url="")
        calls = []
        monkeypatch.setattr(RelayClient, "transcribe", lambda *a: calls.append(a))

        capture = SpeechCapture(ClipRecording, platform=Platform.default, settings=settings)
        capture.start_capture()
        capture.recording.feed(b"audio")
        first = capture.recording

        with pytest.raises(ConfigurationError):
            await capture.stop_capture_and_transcribe()

        assert calls == []
        assert capture.state is CaptureState.idle
        assert capture.recording is not first
        assert not first.is_recording
        assert first.uri is None

    async def test_relay_url_resolved_from_settings(self, make_settings, monkeypatch):
        settings = make_settings(stt_relay_url="http://relay.test/speech-to-text")
        seen = []

        async def _transcribe(self, audio_b64, config):
            seen.append(self.url)
            return "ok"

        monkeypatch.setattr(RelayClient, "transcribe", _transcribe)
        capture = SpeechCapture(ClipRecording, platform=Platform.default, settings=settings)
        assert await _record(capture, b"x") == "ok"
        assert seen == ["http://relay.test/speech-to-text"]

    def test_platform_detected_from_settings(self, make_settings):
        settings = make_settings(capture_platform="web")
        capture = SpeechCapture(ClipRecording, settings=settings)
        assert capture.platform is Platform.web
