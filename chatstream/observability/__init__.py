from .ingestion import configure_observability_logger, log_event
from .enrichment import RedactionConfig, RedactionFilter
from .llmobs import annotate_span, llm_span

__all__ = [
    "configure_observability_logger",
    "log_event",
    "RedactionConfig",
    "RedactionFilter",
    "annotate_span",
    "llm_span",
]
