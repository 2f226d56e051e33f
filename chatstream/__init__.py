from chatstream.api.schemas.llm import (
    Author,
    ConversationTurn,
    GroundingSource,
    StreamChunk,
)
from chatstream.application.streams import (
    get_chat_response_stream,
    get_deep_dive_response_stream,
)
from chatstream.domain.errors import ConfigurationError

__all__ = [
    "Author",
    "ConversationTurn",
    "GroundingSource",
    "StreamChunk",
    "get_chat_response_stream",
    "get_deep_dive_response_stream",
    "ConfigurationError",
]
