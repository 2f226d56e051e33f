# Load environment variables before anything else
from dotenv import load_dotenv  # # Import dotenv loader
load_dotenv()  # # Ensure API and Datadog keys are present at import time

import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chatstream.api.routers import chat as chat_router
from chatstream.domain.errors import ConfigurationError
from chatstream.infrastructure.config.settings import Settings, get_settings

# Datadog tracing and LLM Observability (agentless mode)
import ddtrace
from ddtrace.llmobs import LLMObs

# Structured JSON logger integration
from chatstream.observability.ingestion import configure_observability_logger


def _validate_env(settings: Settings) -> None:
    # # Ensure required Datadog keys for agentless ingestion
    if not settings.llmobs_enabled:
        return
    required = ["DD_API_KEY"]
    missing = [k for k in required if not os.getenv(k)]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables for Datadog LLMObs: {missing}. "
            "Check that .env is present and load_dotenv() executed."
        )


def _ensure_ml_app(settings: Settings) -> str:
    # # Ensure ML application name exists for Datadog correlation
    ml_app = os.getenv("DD_LLMOBS_ML_APP")
    if ml_app:
        return ml_app

    # # Fallback to safe normalized name
    fallback = settings.app_name.replace(" ", "_").lower()
    os.environ["DD_LLMOBS_ML_APP"] = fallback
    return fallback


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    _validate_env(settings)

    if settings.tracing_enabled:
        # # Auto-instrument FastAPI request handling
        ddtrace.patch(fastapi=True)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    @app.on_event("startup")
    async def startup_observability() -> None:
        # # Configure JSON logging + Datadog trace correlation
        configure_observability_logger(settings.log_level.upper())

        if settings.llmobs_enabled:
            # # Enable Datadog LLM Observability (agentless)
            LLMObs.enable(ml_app=_ensure_ml_app(settings), agentless_enabled=True)

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    # # Attach routers
    app.include_router(chat_router.router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {
            "status": "ok",
            "app": settings.app_name,
            "environment": settings.environment,
        }

    return app


# # ASGI application instance
app = create_app()
