# Interface-driven orchestrator for the two Gemini streaming flows
from typing import Any, AsyncIterator, Dict, Optional, Sequence
import logging
import time

from chatstream.api.schemas.llm import ConversationTurn, StreamChunk
from chatstream.domain.prompts import CHAT_ERROR_MESSAGE, DEEP_DIVE_ERROR_MESSAGE

# Interfaces
from chatstream.domain.interfaces.illm_client import ILLMClient
from chatstream.domain.interfaces.iredaction_filter import IRedactionFilter
from chatstream.domain.interfaces.iuploaded_file import IUploadedFile

# Observability helpers
from chatstream.observability.ingestion import log_event
from chatstream.observability.llmobs import annotate_span, llm_span


class ResponseStreamOrchestrator:
    # Orchestrator depends purely on interfaces
    def __init__(
        self,
        llm_client: ILLMClient,
        redaction: IRedactionFilter,
        settings: Any,
    ) -> None:
        self._client = llm_client
        self._redaction = redaction
        self._settings = settings

    def ensure_ready(self) -> None:
        # Missing credentials surface here and are never turned into placeholders
        self._client.init_client()

    async def get_chat_response_stream(
        self,
        history: Sequence[ConversationTurn],
        new_message: str,
    ) -> AsyncIterator[StreamChunk]:
        self.ensure_ready()

        request_metadata = {"history_turns": len(history)}
        stream = self._guarded_stream(
            flow="chat",
            model_name=self._settings.chat_model_name,
            source=self._client.stream_chat(history, new_message),
            error_message=CHAT_ERROR_MESSAGE,
            prompt=self._redaction.redact_preview(new_message),
            request_metadata=request_metadata,
        )
        async for chunk in stream:
            yield chunk

    async def get_deep_dive_response_stream(
        self,
        new_message: str,
        file: Optional[IUploadedFile] = None,
    ) -> AsyncIterator[StreamChunk]:
        self.ensure_ready()

        request_metadata = {
            "has_file": file is not None,
            "mime_type": getattr(file, "content_type", None),
        }
        stream = self._guarded_stream(
            flow="deep_dive",
            model_name=self._settings.deep_dive_model_name,
            source=self._client.stream_deep_dive(new_message, file),
            error_message=DEEP_DIVE_ERROR_MESSAGE,
            prompt=self._redaction.redact_preview(new_message),
            request_metadata=request_metadata,
        )
        async for chunk in stream:
            yield chunk

    async def _guarded_stream(
        self,
        flow: str,
        model_name: str,
        source: AsyncIterator[StreamChunk],
        error_message: str,
        prompt: str,
        request_metadata: Dict[str, Any],
    ) -> AsyncIterator[StreamChunk]:
        # Relays provider chunks; any provider failure ends the stream with one error chunk
        log_event(
            event_type=f"{flow}_stream_request",
            message=f"Received {flow} stream request",
            extra_fields={"model": model_name, "message": prompt, **request_metadata},
        )

        start = time.perf_counter()
        chunk_count = 0
        text_parts: list[str] = []

        with llm_span(model_name=model_name, name=f"{flow}_stream") as span:
            annotate_span(
                span,
                input_data=[{"role": "user", "content": prompt}],
                metadata=request_metadata,
            )
            try:
                async for chunk in source:
                    chunk_count += 1
                    text_parts.append(chunk.text)
                    yield chunk
            except Exception as exc:
                latency_ms = (time.perf_counter() - start) * 1000.0
                log_event(
                    event_type=f"{flow}_stream_error",
                    message=f"Error getting {flow} response",
                    level=logging.ERROR,
                    extra_fields={
                        "model": model_name,
                        "chunks_delivered": chunk_count,
                        "latency_ms": latency_ms,
                        "error_type": type(exc).__name__,
                    },
                    exc_info=exc,
                )
                annotate_span(
                    span,
                    output_data=error_message,
                    metadata={"latency_ms": latency_ms, "error_type": type(exc).__name__},
                )
                yield StreamChunk.error(error_message)
                return

            latency_ms = (time.perf_counter() - start) * 1000.0
            log_event(
                event_type=f"{flow}_stream_completed",
                message=f"Completed {flow} stream",
                extra_fields={
                    "model": model_name,
                    "chunks_delivered": chunk_count,
                    "latency_ms": latency_ms,
                },
            )
            annotate_span(
                span,
                output_data="".join(text_parts),
                metadata={"latency_ms": latency_ms, "chunks": chunk_count},
            )
