# Defines the contract for a streaming LLM backend client
from typing import Any, AsyncIterator, Optional, Protocol, Sequence

from chatstream.api.schemas.llm import ConversationTurn, StreamChunk
from chatstream.domain.interfaces.iuploaded_file import IUploadedFile


class ILLMClient(Protocol):
    # Resolves the credential and builds the provider handle once
    def init_client(self) -> Any:
        ...

    # Streams a conversational reply on top of prior turns
    def stream_chat(
        self,
        history: Sequence[ConversationTurn],
        new_message: str,
    ) -> AsyncIterator[StreamChunk]:
        ...

    # Streams a single-turn document analysis reply
    def stream_deep_dive(
        self,
        new_message: str,
        file: Optional[IUploadedFile] = None,
    ) -> AsyncIterator[StreamChunk]:
        ...
