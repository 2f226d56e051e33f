from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from chatstream.infrastructure.config.settings import Settings
from chatstream.infrastructure.llm.gemini.client import GeminiLLMClient
from chatstream.application.orchestrators.stream_orchestrator import ResponseStreamOrchestrator
from chatstream.observability.enrichment import RedactionFilter


def make_chunk(text: Optional[str], webs: Optional[List[Dict[str, Any]]] = None) -> SimpleNamespace:
    # Shaped like a google-genai GenerateContentResponse
    if webs is None:
        return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=None)])
    grounding_chunks = [
        SimpleNamespace(web=SimpleNamespace(**web) if web is not None else None)
        for web in webs
    ]
    return SimpleNamespace(
        text=text,
        candidates=[
            SimpleNamespace(
                grounding_metadata=SimpleNamespace(grounding_chunks=grounding_chunks)
            )
        ],
    )


async def _iterate(items):
    for item in items:
        if isinstance(item, BaseException):
            raise item
        yield item


class FakeAsyncChat:
    def __init__(self, owner: "FakeChats") -> None:
        self._owner = owner

    async def send_message_stream(self, message):
        self._owner.sent_messages.append(message)
        if self._owner.setup_error is not None:
            raise self._owner.setup_error
        return _iterate(self._owner.items)


class FakeChats:
    def __init__(self) -> None:
        self.items: List[Any] = []
        self.setup_error: Optional[BaseException] = None
        self.create_calls: List[Dict[str, Any]] = []
        self.sent_messages: List[Any] = []

    def create(self, **kwargs):
        self.create_calls.append(kwargs)
        return FakeAsyncChat(self)


class FakeModels:
    def __init__(self) -> None:
        self.items: List[Any] = []
        self.setup_error: Optional[BaseException] = None
        self.calls: List[Dict[str, Any]] = []

    async def generate_content_stream(self, **kwargs):
        self.calls.append(kwargs)
        if self.setup_error is not None:
            raise self.setup_error
        return _iterate(self.items)


class FakeGenaiClient:
    # Mimics the `client.aio` surface used by the streaming flows
    def __init__(self) -> None:
        self.chats = FakeChats()
        self.models = FakeModels()
        self.aio = SimpleNamespace(chats=self.chats, models=self.models)


class FakeUpload:
    def __init__(self, data: bytes, content_type: Optional[str]) -> None:
        self._data = data
        self.content_type = content_type
        self.read_calls = 0

    async def read(self) -> bytes:
        self.read_calls += 1
        return self._data


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        API_KEY="test-key",
        CHATSTREAM_LOCAL_STORAGE_PATH=str(tmp_path / "local_storage.json"),
    )


@pytest.fixture
def keyless_settings(tmp_path) -> Settings:
    return Settings(
        API_KEY=None,
        CHATSTREAM_LOCAL_STORAGE_PATH=str(tmp_path / "local_storage.json"),
    )


@pytest.fixture
def fake_genai() -> FakeGenaiClient:
    return FakeGenaiClient()


@pytest.fixture
def llm_client(settings, fake_genai) -> GeminiLLMClient:
    return GeminiLLMClient(settings=settings, client=fake_genai)


@pytest.fixture
def orchestrator(settings, llm_client) -> ResponseStreamOrchestrator:
    return ResponseStreamOrchestrator(
        llm_client=llm_client,
        redaction=RedactionFilter(),
        settings=settings,
    )


async def collect(stream) -> list:
    return [chunk async for chunk in stream]
