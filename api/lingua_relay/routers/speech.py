import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from lingua_relay.dependencies import SettingsDep, UpstreamDep
from lingua_relay.errors import ServiceUnavailable, UpstreamError
from lingua_relay.schemas.error import ErrorResponse
from lingua_relay.schemas.speech import SpeechRequest
from lingua_relay.services.relay import run_synthesize_speech
from lingua_relay.services.validation import parse_body

logger = logging.getLogger("lingua_relay")
router = APIRouter()

TTS_NOT_CONFIGURED = "TTS API key is not configured on the server."
BODY_DOC = "JSON object with `text` and `langCode`"


@router.post(
    "/synthesize-speech",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Text-to-Speech (Google Cloud TTS)",
)
async def synthesize_speech(
    settings: SettingsDep,
    upstream: UpstreamDep,
    body: Any = Body(None, description=BODY_DOC),
):
    """Synthesizes `text` as MP3 with a neutral voice for `langCode`.

    The upstream JSON is returned as-is; the audio stays base64-encoded under
    `audioContent`.
    """
    if not settings.tts_configured:
        raise ServiceUnavailable(TTS_NOT_CONFIGURED)

    req = parse_body(
        SpeechRequest, body, ("text", "langCode"), "Missing text or language code"
    )

    try:
        payload, processing_ms = await run_synthesize_speech(
            upstream, req.text, req.lang_code
        )
    except UpstreamError as e:
        logger.error("Speech Synthesis Error: %s", e.details)
        raise UpstreamError("Failed to synthesize speech", details=e.details) from e

    logger.info(
        "Synthesized %d chars (%s, %dms)",
        len(req.text), req.lang_code, round(processing_ms),
    )
    return JSONResponse(content=payload)
