from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from ddtrace.llmobs import LLMObs


@contextmanager
def llm_span(model_name: str, name: str) -> Iterator[Optional[Any]]:
    # # Open a Datadog LLMObs span around a Gemini call, or nothing when LLMObs is off
    if not LLMObs.enabled:
        yield None
        return

    with LLMObs.llm(model_name=model_name, model_provider="google", name=name) as span:
        yield span


def annotate_span(
    span: Optional[Any],
    input_data: Any = None,
    output_data: Any = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    # # Attach input, output and metadata to an open LLMObs span
    if span is None:
        return
    LLMObs.annotate(
        span=span,
        input_data=input_data,
        output_data=output_data,
        metadata=metadata,
    )
