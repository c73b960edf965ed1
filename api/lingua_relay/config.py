from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    # Upstream credentials (optional; endpoints answer 500 when unset)
    gemini_api_key: str = ""
    tts_api_key: str = ""

    # Gemini
    gemini_model: str = "gemini-1.5-flash-latest"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"

    # Cloud Text-to-Speech
    tts_base_url: str = "https://texttospeech.googleapis.com"

    upstream_timeout_s: float = 30.0

    # Static frontend
    static_dir: str = "public"

    # Monitoring
    prometheus_enabled: bool = True

    # CORS
    cors_origins: List[str] = ["*"]

    model_config = {
        "env_file": ["../.env", ".env"],
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("gemini_api_key", "tts_api_key", mode="before")
    @classmethod
    def _strip_key(cls, value):
        if value is None:
            return ""
        return str(value).strip()

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def tts_configured(self) -> bool:
        return bool(self.tts_api_key)
