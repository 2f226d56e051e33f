from __future__ import annotations

from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class Author(str, Enum):
    USER = "user"
    AI = "ai"


class ConversationTurn(BaseModel):
    # # One chronological message of a conversation, owned by the caller
    model_config = ConfigDict(frozen=True)

    author: Author
    content: str


class GroundingSource(BaseModel):
    # # Web citation attached to a response chunk
    uri: str
    title: str


class StreamChunk(BaseModel):
    # # Single streamed element, tagged as provider output or terminal error placeholder
    type: Literal["chunk", "error"] = "chunk"
    text: str = ""
    sources: List[GroundingSource] = Field(default_factory=list)

    @classmethod
    def ok(cls, text: str, sources: List[GroundingSource] | None = None) -> "StreamChunk":
        return cls(type="chunk", text=text, sources=list(sources or []))

    @classmethod
    def error(cls, text: str) -> "StreamChunk":
        return cls(type="error", text=text, sources=[])


class ChatStreamRequest(BaseModel):
    # # Request body for the conversational streaming endpoint
    history: List[ConversationTurn] = Field(default_factory=list)
    message: str
