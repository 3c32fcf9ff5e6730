"""
FastAPI application factory.

``create_app()`` assembles the relay with CORS, the body size limit,
error handlers, the speech route, and the health endpoint. The
module-level ``app`` instance allows ``uvicorn src.api.app:app --reload``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.api.middleware.body_limit import BodySizeLimitMiddleware
from src.api.middleware.error_handler import register_error_handlers
from src.api.routes import speech
from src.core.config import get_settings
from src.core.models import HealthResponse


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Returns:
        FastAPI: The configured relay, ready for ``uvicorn``.
    """

    app = FastAPI(
        title="SpeechRelay",
        description="Relay that forwards recorded speech to a cloud "
        "recognition service and returns the transcript.",
        version="0.1.0",
    )

    app.add_middleware(BodySizeLimitMiddleware)

    # -- CORS (outermost; also wraps 413 rejections) --
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Liveness (never touches the recognition service) --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse()

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return (
            "The Speech-to-Text API is up and running! "
            "Try GET /health or POST /speech-to-text"
        )

    app.include_router(speech.router)

    return app


app = create_app()
