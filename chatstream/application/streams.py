# Module-level entry points for callers that do not go through the HTTP API
from typing import AsyncIterator, Optional, Sequence

from chatstream.api.schemas.llm import ConversationTurn, StreamChunk
from chatstream.domain.interfaces.iuploaded_file import IUploadedFile
from chatstream.infrastructure.factories.orchestrator_factory import build_response_orchestrator


async def get_chat_response_stream(
    history: Sequence[ConversationTurn],
    new_message: str,
) -> AsyncIterator[StreamChunk]:
    orchestrator = build_response_orchestrator()
    async for chunk in orchestrator.get_chat_response_stream(history, new_message):
        yield chunk


async def get_deep_dive_response_stream(
    new_message: str,
    file: Optional[IUploadedFile] = None,
) -> AsyncIterator[StreamChunk]:
    orchestrator = build_response_orchestrator()
    async for chunk in orchestrator.get_deep_dive_response_stream(new_message, file):
        yield chunk
