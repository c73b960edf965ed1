import httpx
import pytest

from lingua_relay.config import Settings
from lingua_relay.main import create_app


def gemini_reply(text: str) -> dict:
    """A minimal generateContent response carrying one candidate."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeUpstream:
    """Stands in for GoogleUpstream and records every outbound call."""

    def __init__(self, text_response=None, speech_response=None, error=None):
        self.text_response = text_response
        self.speech_response = speech_response
        self.error = error
        self.calls: list[tuple] = []

    async def generate_text(self, prompt: str) -> dict:
        self.calls.append(("generate_text", prompt))
        if self.error is not None:
            raise self.error
        return self.text_response

    async def synthesize_speech(self, text: str, lang_code: str) -> dict:
        self.calls.append(("synthesize_speech", text, lang_code))
        if self.error is not None:
            raise self.error
        return self.speech_response


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": "test-gemini-key",
        "tts_api_key": "test-tts-key",
        "prometheus_enabled": False,
        "static_dir": "__no_static_dir__",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(settings, fake_upstream):
    return create_app(settings=settings, upstream=fake_upstream)


@pytest.fixture
def post():
    """Returns an async helper that POSTs JSON to an app in-process."""

    async def _post(app, path: str, body=None):
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        ) as client:
            if body is None:
                return await client.post(path)
            return await client.post(path, json=body)

    return _post
