# # Public enrichment API for ChatStream observability

from .redaction_filter import (
    RedactionConfig,
    RedactionFilter,
)

__all__ = [
    "RedactionConfig",
    "RedactionFilter",
]
