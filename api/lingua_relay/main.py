import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from lingua_relay.config import Settings
from lingua_relay.errors import RelayError
from lingua_relay.models.google_upstream import GoogleUpstream, load_upstream
from lingua_relay.routers import health, speech, suggest, translate

logger = logging.getLogger("lingua_relay")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Lingua Relay starting up on port %d", settings.port)
    logger.info(
        "Gemini key configured: %s, TTS key configured: %s",
        settings.gemini_configured, settings.tts_configured,
    )
    yield
    logger.info("Lingua Relay shutting down")


API_DESCRIPTION = """
# Lingua Relay API

Relays browser requests to Google Gemini and Cloud Text-to-Speech, keeping
the API keys on the server.

| Endpoint | Upstream |
|----------|----------|
| `POST /translate` | Gemini `generateContent` |
| `POST /suggest-reply` | Gemini `generateContent` |
| `POST /synthesize-speech` | Cloud TTS `text:synthesize` |
"""


async def relay_error_handler(request: Request, exc: RelayError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    upstream: Optional[GoogleUpstream] = None,
) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="Lingua Relay API",
        description=API_DESCRIPTION,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "health", "description": "Server status"},
            {"name": "translate", "description": "Translation through Gemini"},
            {"name": "suggest", "description": "Reply suggestions through Gemini"},
            {"name": "speech", "description": "Speech synthesis through Cloud TTS"},
        ],
    )
    app.state.settings = settings
    app.state.upstream = upstream or load_upstream(settings)

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics
    if settings.prometheus_enabled:
        from lingua_relay.middleware.metrics import setup_metrics

        setup_metrics(app)

    # Routers
    app.include_router(health.router, tags=["health"])
    app.include_router(translate.router, tags=["translate"])
    app.include_router(suggest.router, tags=["suggest"])
    app.include_router(speech.router, tags=["speech"])

    # Frontend, mounted last so API routes win
    if os.path.isdir(settings.static_dir):
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True), name="static"
        )
    else:
        logger.debug("Static directory %s not found, not serving files", settings.static_dir)

    return app


app = create_app()


def run():
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
