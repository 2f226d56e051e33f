from .log_collector import (
    JsonFormatter,
    log_event,
    configure_observability_logger,
)

__all__ = [
    "JsonFormatter",
    "log_event",
    "configure_observability_logger",
]
