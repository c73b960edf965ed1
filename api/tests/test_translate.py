"""Tests for POST /translate."""

import json

import httpx
import pytest

from conftest import FakeUpstream, gemini_reply, make_settings
from lingua_relay.errors import TransportError, UpstreamError
from lingua_relay.main import create_app
from lingua_relay.services.relay import MULTI_WORD_TEMPLATE, build_translate_prompt

BODY = {"text": "cat", "sourceLang": "English", "targetLang": "French"}


class TestTranslatePrompt:
    def test_single_word_template(self):
        prompt = build_translate_prompt("cat", "English", "French")
        assert prompt == (
            'Translate the word "cat" from English to French. '
            "Provide only the single translated word."
        )

    def test_multi_word_template_when_text_has_space(self):
        prompt = build_translate_prompt("good morning", "English", "French")
        assert prompt == MULTI_WORD_TEMPLATE.format(
            text="good morning", source="English", target="French"
        )
        assert "the word" not in prompt
        assert "Provide ONLY the translated text" in prompt


class TestTranslateEndpoint:
    @pytest.mark.asyncio
    async def test_returns_trimmed_translation(self, app, fake_upstream, post):
        fake_upstream.text_response = gemini_reply("  chat \n")
        resp = await post(app, "/translate", BODY)
        assert resp.status_code == 200
        assert resp.json() == {"translation": "chat"}

    @pytest.mark.asyncio
    async def test_single_word_prompt_sent_upstream(self, app, fake_upstream, post):
        fake_upstream.text_response = gemini_reply("chat")
        await post(app, "/translate", BODY)
        assert len(fake_upstream.calls) == 1
        method, prompt = fake_upstream.calls[0]
        assert method == "generate_text"
        assert 'Translate the word "cat" from English to French' in prompt

    @pytest.mark.asyncio
    async def test_multi_word_prompt_sent_upstream(self, app, fake_upstream, post):
        fake_upstream.text_response = gemini_reply("bonjour")
        body = dict(BODY, text="good morning")
        resp = await post(app, "/translate", body)
        assert resp.status_code == 200
        _, prompt = fake_upstream.calls[0]
        assert prompt.startswith("Translate the following English text to French.")
        assert 'Text: "good morning"' in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["text", "sourceLang", "targetLang"])
    async def test_missing_field_is_400_without_upstream_call(
        self, app, fake_upstream, post, missing
    ):
        body = {k: v for k, v in BODY.items() if k != missing}
        resp = await post(app, "/translate", body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required fields"}
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_empty_field_is_400(self, app, fake_upstream, post):
        resp = await post(app, "/translate", dict(BODY, text=""))
        assert resp.status_code == 400
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_no_body_is_400(self, app, fake_upstream, post):
        resp = await post(app, "/translate")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required fields"}
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_unconfigured_key_is_500_without_upstream_call(self, post):
        upstream = FakeUpstream(text_response=gemini_reply("chat"))
        app = create_app(settings=make_settings(gemini_api_key=""), upstream=upstream)
        resp = await post(app, "/translate", BODY)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Gemini API key is not configured on the server."}
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_whitespace_only_key_counts_as_unconfigured(self, post):
        upstream = FakeUpstream()
        app = create_app(settings=make_settings(gemini_api_key="   "), upstream=upstream)
        resp = await post(app, "/translate", BODY)
        assert resp.status_code == 500
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_upstream_error_message_in_details(self, app, fake_upstream, post):
        fake_upstream.error = UpstreamError("Upstream request failed", details="quota exceeded")
        resp = await post(app, "/translate", BODY)
        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Failed to translate text",
            "details": "quota exceeded",
        }

    @pytest.mark.asyncio
    async def test_transport_error_is_500(self, app, fake_upstream, post):
        fake_upstream.error = TransportError(
            "Upstream request failed", details="ConnectError('refused')"
        )
        resp = await post(app, "/translate", BODY)
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to translate text"

    @pytest.mark.asyncio
    async def test_no_candidate_is_500(self, app, fake_upstream, post):
        fake_upstream.text_response = {"candidates": []}
        resp = await post(app, "/translate", BODY)
        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Failed to translate text",
            "details": "No translation candidate found in the API response.",
        }

    @pytest.mark.asyncio
    async def test_malformed_candidate_is_500(self, app, fake_upstream, post):
        fake_upstream.text_response = {"candidates": [{"finishReason": "SAFETY"}]}
        resp = await post(app, "/translate", BODY)
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to translate text"

    @pytest.mark.asyncio
    async def test_wrong_field_type_is_400(self, app, fake_upstream, post):
        resp = await post(app, "/translate", dict(BODY, text=42))
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request body"}
        assert fake_upstream.calls == []


class TestTranslateBodyHandling:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [dict(BODY, text=42), [1], "cat"])
    async def test_unconfigured_key_wins_over_malformed_body(self, post, body):
        upstream = FakeUpstream()
        app = create_app(settings=make_settings(gemini_api_key=""), upstream=upstream)
        resp = await post(app, "/translate", body)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Gemini API key is not configured on the server."}
        assert upstream.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, 0.0, False, None])
    async def test_falsy_values_count_as_missing(self, app, fake_upstream, post, value):
        resp = await post(app, "/translate", dict(BODY, text=value))
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required fields"}
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_json_array_counts_as_missing_fields(self, app, fake_upstream, post):
        resp = await post(app, "/translate", [BODY])
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required fields"}
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_text_plain_body_counts_as_missing_fields(self, app, fake_upstream):
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        ) as client:
            resp = await client.post(
                "/translate",
                content=json.dumps(BODY),
                headers={"Content-Type": "text/plain;charset=UTF-8"},
            )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required fields"}
        assert fake_upstream.calls == []
