from fastapi import APIRouter

from lingua_relay.dependencies import SettingsDep
from lingua_relay.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(settings: SettingsDep):
    """Reports whether each upstream credential is configured. Never calls upstream."""
    ok = settings.gemini_configured and settings.tts_configured
    return HealthResponse(
        status="healthy" if ok else "degraded",
        version="0.1.0",
        gemini_configured=settings.gemini_configured,
        tts_configured=settings.tts_configured,
    )
