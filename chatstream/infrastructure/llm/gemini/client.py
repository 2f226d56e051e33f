from typing import AsyncIterator, Optional, Sequence

from google import genai
from google.genai import types

from chatstream.api.schemas.llm import ConversationTurn, StreamChunk
from chatstream.domain.errors import ConfigurationError
from chatstream.domain.interfaces.iuploaded_file import IUploadedFile
from chatstream.domain.prompts import DEEP_DIVE_DEFAULT_PROMPT, SYSTEM_PROMPT
from chatstream.infrastructure.config.local_storage import LocalKeyStore
from chatstream.infrastructure.config.settings import Settings, get_settings
from chatstream.infrastructure.llm.gemini.converters import (
    build_gemini_history,
    extract_grounding_sources,
    file_to_part,
)
from chatstream.observability.ingestion import log_event


class GeminiLLMClient:
    # # Thin wrapper around the google-genai async client for chat and deep-dive streams
    def __init__(
        self,
        settings: Optional[Settings] = None,
        key_store: Optional[LocalKeyStore] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._key_store = key_store or LocalKeyStore(self._settings.local_storage_path)
        self._client = client
        self._initialized = client is not None

    def _resolve_api_key(self) -> str:
        # # Environment first, then the local key store
        api_key = (self._settings.api_key or "").strip()
        if api_key:
            return api_key

        stored = self._key_store.get_item(self._settings.local_storage_key)
        if stored:
            return stored

        raise ConfigurationError(
            "API Key not found. Please ensure it is set in environment (API_KEY) "
            f"or local storage ({self._settings.local_storage_key})."
        )

    def init_client(self) -> genai.Client:
        # # Lazily build the Gemini client once; later calls reuse it
        if self._initialized:
            assert self._client is not None
            return self._client

        api_key = self._resolve_api_key()
        self._client = genai.Client(api_key=api_key)
        self._initialized = True

        log_event(
            event_type="llm_client_initialized",
            message="Gemini client initialized",
            extra_fields={
                "chat_model": self._settings.chat_model_name,
                "deep_dive_model": self._settings.deep_dive_model_name,
            },
        )
        return self._client

    def _chat_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

    def _deep_dive_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            thinking_config=types.ThinkingConfig(
                thinking_budget=self._settings.thinking_budget,
            ),
        )

    async def stream_chat(
        self,
        history: Sequence[ConversationTurn],
        new_message: str,
    ) -> AsyncIterator[StreamChunk]:
        # # Open a chat session with search grounding and stream the reply
        client = self.init_client()
        chat = client.aio.chats.create(
            model=self._settings.chat_model_name,
            history=build_gemini_history(history),
            config=self._chat_config(),
        )

        stream = await chat.send_message_stream(new_message)
        async for chunk in stream:
            yield StreamChunk.ok(
                text=chunk.text or "",
                sources=extract_grounding_sources(chunk),
            )

    async def stream_deep_dive(
        self,
        new_message: str,
        file: Optional[IUploadedFile] = None,
    ) -> AsyncIterator[StreamChunk]:
        # # Single-turn request: optional file part, then the prompt text
        client = self.init_client()

        parts: list[types.Part] = []
        if file is not None:
            parts.append(await file_to_part(file))
        parts.append(types.Part(text=new_message or DEEP_DIVE_DEFAULT_PROMPT))

        stream = await client.aio.models.generate_content_stream(
            model=self._settings.deep_dive_model_name,
            contents=[types.Content(role="user", parts=parts)],
            config=self._deep_dive_config(),
        )
        async for chunk in stream:
            yield StreamChunk.ok(text=chunk.text or "")
