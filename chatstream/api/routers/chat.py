# Chat router streaming NDJSON from the dependency-injected orchestrator
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import StreamingResponse

from chatstream.api.schemas.llm import ChatStreamRequest, StreamChunk
from chatstream.application.orchestrators.stream_orchestrator import ResponseStreamOrchestrator

# Dependency Injection factory
from chatstream.infrastructure.factories.orchestrator_factory import build_response_orchestrator


NDJSON_MEDIA_TYPE = "application/x-ndjson"

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


@dataclass
class BufferedUpload:
    # Upload content held in memory; the multipart body is closed once the endpoint returns
    content_type: Optional[str]
    data: bytes

    async def read(self) -> bytes:
        return self.data


def get_response_orchestrator() -> ResponseStreamOrchestrator:
    # Dependency-injected orchestrator with full wiring
    return build_response_orchestrator()


async def _ndjson(chunks: AsyncIterator[StreamChunk]) -> AsyncIterator[bytes]:
    # Streams one JSON object per line
    async for chunk in chunks:
        yield (chunk.model_dump_json() + "\n").encode("utf-8")


@router.post("/stream")
async def chat_stream_endpoint(
    req: ChatStreamRequest,
    orchestrator: ResponseStreamOrchestrator = Depends(get_response_orchestrator),
) -> StreamingResponse:
    # Fail before the response starts when the client cannot be configured
    orchestrator.ensure_ready()

    chunks = orchestrator.get_chat_response_stream(req.history, req.message)
    return StreamingResponse(_ndjson(chunks), media_type=NDJSON_MEDIA_TYPE)


@router.post("/deep-dive/stream")
async def deep_dive_stream_endpoint(
    message: str = Form(default=""),
    file: Optional[UploadFile] = File(default=None),
    orchestrator: ResponseStreamOrchestrator = Depends(get_response_orchestrator),
) -> StreamingResponse:
    orchestrator.ensure_ready()

    upload = None
    if file is not None:
        upload = BufferedUpload(content_type=file.content_type, data=await file.read())

    chunks = orchestrator.get_deep_dive_response_stream(message, upload)
    return StreamingResponse(_ndjson(chunks), media_type=NDJSON_MEDIA_TYPE)
