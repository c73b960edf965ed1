import logging
import time
from typing import Any, Optional

import httpx

from lingua_relay.config import Settings
from lingua_relay.errors import TransportError, UpstreamError
from lingua_relay.middleware.metrics import UPSTREAM_DURATION, UPSTREAM_REQUESTS

logger = logging.getLogger("lingua_relay")

UPSTREAM_FAILED = "Upstream request failed"


def _error_message(response: httpx.Response, data: Any, fallback: str) -> str:
    """Pick `error.message` out of a Google error body, else the status text."""
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"{fallback}: {response.reason_phrase}"


class GoogleUpstream:
    """Thin async client for Gemini generateContent and Cloud TTS synthesize.

    Credentials travel in the `x-goog-api-key` header so they never show up
    in request URLs (and therefore never in httpx's request log lines).
    """

    def __init__(
        self,
        gemini_api_key: str,
        tts_api_key: str,
        gemini_model: str = "gemini-1.5-flash-latest",
        gemini_base_url: str = "https://generativelanguage.googleapis.com",
        tts_base_url: str = "https://texttospeech.googleapis.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.gemini_api_key = gemini_api_key
        self.tts_api_key = tts_api_key
        self.gemini_model = gemini_model
        self.gemini_base_url = gemini_base_url.rstrip("/")
        self.tts_base_url = tts_base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def generate_url(self) -> str:
        return f"{self.gemini_base_url}/v1beta/models/{self.gemini_model}:generateContent"

    @property
    def synthesize_url(self) -> str:
        return f"{self.tts_base_url}/v1/text:synthesize"

    async def generate_text(self, prompt: str) -> dict:
        """Send a single-prompt generation request. Returns the raw response JSON."""
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        return await self._post(
            "gemini",
            self.generate_url,
            self.gemini_api_key,
            body,
            fallback="API request failed",
        )

    async def synthesize_speech(self, text: str, lang_code: str) -> dict:
        """Request MP3 audio with a neutral voice. Returns the raw response JSON."""
        body = {
            "input": {"text": text},
            "voice": {"languageCode": lang_code, "ssmlGender": "NEUTRAL"},
            "audioConfig": {"audioEncoding": "MP3"},
        }
        return await self._post(
            "tts",
            self.synthesize_url,
            self.tts_api_key,
            body,
            fallback="TTS API request failed",
        )

    async def _post(
        self, api: str, url: str, api_key: str, body: dict, fallback: str
    ) -> dict:
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": api_key,
        }
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=body, headers=headers)
        except httpx.HTTPError as e:
            UPSTREAM_REQUESTS.labels(api=api, outcome="transport_error").inc()
            raise TransportError(UPSTREAM_FAILED, details=f"{fallback}: {e!r}") from e
        finally:
            UPSTREAM_DURATION.labels(api=api).observe(time.perf_counter() - start)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = _error_message(response, data, fallback)
            logger.error(
                "%s upstream error (HTTP %d): %s", api, response.status_code, message
            )
            UPSTREAM_REQUESTS.labels(api=api, outcome="error").inc()
            raise UpstreamError(UPSTREAM_FAILED, details=message)

        if not isinstance(data, dict):
            UPSTREAM_REQUESTS.labels(api=api, outcome="error").inc()
            raise UpstreamError(
                UPSTREAM_FAILED, details=f"{api} upstream returned a non-JSON body"
            )

        UPSTREAM_REQUESTS.labels(api=api, outcome="ok").inc()
        return data


def load_upstream(settings: Settings) -> GoogleUpstream:
    logger.info("Initializing Google upstream client (model=%s)", settings.gemini_model)
    return GoogleUpstream(
        gemini_api_key=settings.gemini_api_key,
        tts_api_key=settings.tts_api_key,
        gemini_model=settings.gemini_model,
        gemini_base_url=settings.gemini_base_url,
        tts_base_url=settings.tts_base_url,
        timeout=settings.upstream_timeout_s,
    )
