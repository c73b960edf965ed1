import logging
from typing import Any

from fastapi import APIRouter, Body

from lingua_relay.dependencies import SettingsDep, UpstreamDep
from lingua_relay.errors import ServiceUnavailable, UpstreamError
from lingua_relay.routers.translate import GEMINI_NOT_CONFIGURED, MISSING_FIELDS
from lingua_relay.schemas.error import ErrorResponse
from lingua_relay.schemas.suggest import SuggestReplyRequest, SuggestReplyResponse
from lingua_relay.services.relay import run_suggest_reply
from lingua_relay.services.validation import parse_body

logger = logging.getLogger("lingua_relay")
router = APIRouter()

BODY_DOC = "JSON object with `text` and `language`"


@router.post(
    "/suggest-reply",
    response_model=SuggestReplyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Suggest short replies to a message",
)
async def suggest_reply(
    settings: SettingsDep,
    upstream: UpstreamDep,
    body: Any = Body(None, description=BODY_DOC),
):
    """Asks Gemini for three short replies to `text`, written in `language`.

    The upstream may return more or fewer lines; they are passed through.
    Failures only carry a generic message, the upstream error text is not
    forwarded to the client.
    """
    if not settings.gemini_configured:
        raise ServiceUnavailable(GEMINI_NOT_CONFIGURED)

    req = parse_body(SuggestReplyRequest, body, ("text", "language"), MISSING_FIELDS)

    try:
        suggestions, processing_ms = await run_suggest_reply(
            upstream, req.text, req.language
        )
    except UpstreamError as e:
        logger.error("Suggestion Error: %s", e.details)
        raise UpstreamError("Failed to generate suggestions") from e

    logger.info(
        "Suggested %d replies in %s (%dms)",
        len(suggestions), req.language, round(processing_ms),
    )
    return SuggestReplyResponse(suggestions=suggestions)
