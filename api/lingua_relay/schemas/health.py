from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    gemini_configured: bool
    tts_configured: bool
