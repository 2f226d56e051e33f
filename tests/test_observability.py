from contextlib import contextmanager

import pytest
from ddtrace.llmobs import LLMObs
from fastapi.testclient import TestClient

from chatstream import main as main_module
from chatstream.api.schemas.llm import Author, ConversationTurn
from chatstream.infrastructure.config.settings import Settings
from chatstream.main import create_app
from chatstream.observability.llmobs import annotate_span, llm_span

from tests.conftest import FakeUpload, collect, make_chunk


class RecordingLLMObs:
    def __init__(self) -> None:
        self.spans = []
        self.annotations = []
        self.enable_calls = []

    @contextmanager
    def llm(self, **kwargs):
        span = object()
        self.spans.append((span, kwargs))
        yield span

    def annotate(self, **kwargs):
        self.annotations.append(kwargs)

    def enable(self, **kwargs):
        self.enable_calls.append(kwargs)


@pytest.fixture
def recorder(monkeypatch):
    recording = RecordingLLMObs()
    monkeypatch.setattr(LLMObs, "enabled", True)
    monkeypatch.setattr(LLMObs, "llm", recording.llm)
    monkeypatch.setattr(LLMObs, "annotate", recording.annotate)
    monkeypatch.setattr(LLMObs, "enable", recording.enable)
    return recording


def test_llm_span_is_noop_when_disabled(monkeypatch):
    monkeypatch.setattr(LLMObs, "enabled", False)

    with llm_span(model_name="gemini-2.5-flash", name="chat_stream") as span:
        annotate_span(span, input_data=[{"role": "user", "content": "hi"}])

    assert span is None


def test_llm_span_opens_google_span_when_enabled(recorder):
    with llm_span(model_name="gemini-2.5-pro", name="deep_dive_stream") as span:
        annotate_span(span, output_data="done", metadata={"chunks": 1})

    assert recorder.spans == [
        (span, {"model_name": "gemini-2.5-pro", "model_provider": "google", "name": "deep_dive_stream"}),
    ]
    assert recorder.annotations == [
        {"span": span, "input_data": None, "output_data": "done", "metadata": {"chunks": 1}},
    ]


@pytest.mark.asyncio
async def test_chat_span_carries_redacted_prompt_as_user_message(recorder, orchestrator, fake_genai):
    fake_genai.chats.items = [make_chunk("ans"), make_chunk("wer")]
    history = [ConversationTurn(author=Author.USER, content="hello")]

    await collect(orchestrator.get_chat_response_stream(history, "what is entropy, ask ann@uni.edu"))

    span, kwargs = recorder.spans[0]
    assert kwargs["model_name"] == "gemini-2.5-flash"
    request, response = recorder.annotations
    assert request["span"] is span
    assert request["input_data"] == [
        {"role": "user", "content": "what is entropy, ask [REDACTED]"},
    ]
    assert request["metadata"] == {"history_turns": 1}
    assert response["output_data"] == "answer"
    assert response["metadata"]["chunks"] == 2


@pytest.mark.asyncio
async def test_deep_dive_span_records_file_metadata_and_error(recorder, orchestrator, fake_genai):
    fake_genai.models.setup_error = RuntimeError("quota")

    await collect(
        orchestrator.get_deep_dive_response_stream("summarise", FakeUpload(b"x", "application/pdf"))
    )

    request, failure = recorder.annotations
    assert request["input_data"] == [{"role": "user", "content": "summarise"}]
    assert request["metadata"] == {"has_file": True, "mime_type": "application/pdf"}
    assert failure["metadata"]["error_type"] == "RuntimeError"
    assert "deep dive" in failure["output_data"]


def test_create_app_requires_datadog_key_for_llmobs(monkeypatch, tmp_path):
    monkeypatch.delenv("DD_API_KEY", raising=False)
    settings = Settings(
        CHATSTREAM_LLMOBS_ENABLED=True,
        CHATSTREAM_LOCAL_STORAGE_PATH=str(tmp_path / "local_storage.json"),
    )

    with pytest.raises(RuntimeError, match="DD_API_KEY"):
        create_app(settings)


def test_startup_enables_llmobs_with_fallback_ml_app(monkeypatch, recorder, tmp_path):
    monkeypatch.setenv("DD_API_KEY", "dd-test-key")
    monkeypatch.setenv("DD_LLMOBS_ML_APP", "placeholder")
    monkeypatch.delenv("DD_LLMOBS_ML_APP")
    settings = Settings(
        CHATSTREAM_LLMOBS_ENABLED=True,
        CHATSTREAM_LOCAL_STORAGE_PATH=str(tmp_path / "local_storage.json"),
    )

    with TestClient(create_app(settings)) as client:
        assert client.get("/health").status_code == 200

    assert recorder.enable_calls == [
        {"ml_app": "chatstream_gemini_service", "agentless_enabled": True},
    ]


def test_tracing_patches_fastapi(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(main_module.ddtrace, "patch", lambda **kwargs: calls.append(kwargs))
    settings = Settings(
        CHATSTREAM_TRACING_ENABLED=True,
        CHATSTREAM_LOCAL_STORAGE_PATH=str(tmp_path / "local_storage.json"),
    )

    create_app(settings)

    assert calls == [{"fastapi": True}]


def test_tracing_disabled_leaves_ddtrace_untouched(monkeypatch, settings):
    calls = []
    monkeypatch.setattr(main_module.ddtrace, "patch", lambda **kwargs: calls.append(kwargs))

    create_app(settings)

    assert calls == []
