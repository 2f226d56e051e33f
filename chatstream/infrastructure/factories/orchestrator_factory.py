# Builds a fully wired orchestrator instance with all concrete implementations
from functools import lru_cache

# LLM backend
from chatstream.infrastructure.llm.gemini.client import GeminiLLMClient

# Enrichment: redaction
from chatstream.observability.enrichment import RedactionFilter, RedactionConfig

# Config
from chatstream.infrastructure.config.settings import get_settings

# Orchestrator class
from chatstream.application.orchestrators.stream_orchestrator import ResponseStreamOrchestrator


@lru_cache()
def get_llm_client() -> GeminiLLMClient:
    # # Process-wide Gemini client wrapper; the provider handle inside is built lazily
    return GeminiLLMClient(settings=get_settings())


def build_response_orchestrator() -> ResponseStreamOrchestrator:
    # Load app settings
    settings = get_settings()

    return ResponseStreamOrchestrator(
        llm_client=get_llm_client(),
        redaction=RedactionFilter(RedactionConfig()),

        # Pass environment configuration
        settings=settings,
    )
