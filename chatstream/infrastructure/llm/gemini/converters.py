# Conversions between ChatStream models and google-genai request/response types
from typing import Any, List, Sequence

from google.genai import types

from chatstream.api.schemas.llm import Author, ConversationTurn, GroundingSource
from chatstream.domain.interfaces.iuploaded_file import IUploadedFile


DEFAULT_MIME_TYPE = "application/octet-stream"


def build_gemini_history(turns: Sequence[ConversationTurn]) -> List[types.Content]:
    # # Gemini history alternates user/model and must open with a user turn
    history = list(turns)
    if history and history[0].author == Author.AI:
        history.pop(0)

    return [
        types.Content(
            role="user" if turn.author == Author.USER else "model",
            parts=[types.Part(text=turn.content)],
        )
        for turn in history
    ]


def extract_grounding_sources(chunk: Any) -> List[GroundingSource]:
    # # Web citations of the first candidate that carry both a URI and a title
    candidates = getattr(chunk, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    grounding_chunks = getattr(metadata, "grounding_chunks", None) or []

    sources: List[GroundingSource] = []
    for grounding_chunk in grounding_chunks:
        web = getattr(grounding_chunk, "web", None)
        uri = getattr(web, "uri", None)
        title = getattr(web, "title", None)
        if uri and title:
            sources.append(GroundingSource(uri=uri, title=title))
    return sources


async def file_to_part(file: IUploadedFile) -> types.Part:
    # # Read the whole upload and wrap it as inline data (base64 encoded on the wire)
    data = await file.read()
    return types.Part.from_bytes(
        data=data,
        mime_type=file.content_type or DEFAULT_MIME_TYPE,
    )
