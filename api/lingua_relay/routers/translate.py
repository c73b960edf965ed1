import logging
from typing import Any

from fastapi import APIRouter, Body

from lingua_relay.dependencies import SettingsDep, UpstreamDep
from lingua_relay.errors import ServiceUnavailable, UpstreamError
from lingua_relay.schemas.error import ErrorResponse
from lingua_relay.schemas.translate import TranslateRequest, TranslateResponse
from lingua_relay.services.relay import run_translate
from lingua_relay.services.validation import parse_body

logger = logging.getLogger("lingua_relay")
router = APIRouter()

GEMINI_NOT_CONFIGURED = "Gemini API key is not configured on the server."
MISSING_FIELDS = "Missing required fields"
BODY_DOC = "JSON object with `text`, `sourceLang` and `targetLang`"


@router.post(
    "/translate",
    response_model=TranslateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Translate text with Gemini",
)
async def translate(
    settings: SettingsDep,
    upstream: UpstreamDep,
    body: Any = Body(None, description=BODY_DOC),
):
    """Translates `text` from `sourceLang` to `targetLang`.

    Single words get a one-word instruction, anything containing a space is
    translated as running text.

    **Example:** `{"text": "cat", "sourceLang": "English", "targetLang": "French"}`
    """
    if not settings.gemini_configured:
        raise ServiceUnavailable(GEMINI_NOT_CONFIGURED)

    req = parse_body(
        TranslateRequest, body, ("text", "sourceLang", "targetLang"), MISSING_FIELDS
    )

    try:
        translation, processing_ms = await run_translate(
            upstream, req.text, req.source_lang, req.target_lang
        )
    except UpstreamError as e:
        logger.error("Translation Error: %s", e.details)
        raise UpstreamError("Failed to translate text", details=e.details) from e

    logger.info(
        "Translated %d chars %s -> %s (%dms)",
        len(req.text), req.source_lang, req.target_lang, round(processing_ms),
    )
    return TranslateResponse(translation=translation)
