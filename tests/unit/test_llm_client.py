"""Tests for the Gemini client wrapper."""

import asyncio
from types import SimpleNamespace

import pytest

from personalens.errors import UpstreamError
from personalens.llm import GeminiClient, GeminiConfig


class FakeModels:
    """Stand-in for ``client.aio.models``."""

    def __init__(self, text: str | None = "{}", delay: float = 0.0) -> None:
        self.text = text
        self.delay = delay
        self.calls: list[dict] = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        await asyncio.sleep(self.delay)
        return SimpleNamespace(text=self.text)


def with_fake_models(client: GeminiClient, models: FakeModels) -> GeminiClient:
    client.client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return client


async def test_enter_without_api_key_fails() -> None:
    """Test a missing credential is an upstream error."""
    with pytest.raises(UpstreamError, match="GOOGLE_API_KEY"):
        async with GeminiClient(GeminiConfig(google_api_key="")):
            pass


async def test_generate_before_enter_fails() -> None:
    """Test the client must be entered first."""
    with pytest.raises(RuntimeError):
        await GeminiClient(GeminiConfig(google_api_key="k")).generate("hi")


async def test_generate_returns_text() -> None:
    """Test response text is passed through and the model is configurable."""
    models = FakeModels(text='{"estimated_k": 2}')
    client = with_fake_models(
        GeminiClient(GeminiConfig(google_api_key="k", gemini_model="gemini-test")), models
    )

    assert await client.generate("prompt") == '{"estimated_k": 2}'
    assert models.calls[0]["model"] == "gemini-test"
    assert models.calls[0]["contents"] == "prompt"


async def test_generate_empty_text_is_empty_string() -> None:
    """Test a response without text yields an empty string."""
    client = with_fake_models(GeminiClient(GeminiConfig(google_api_key="k")), FakeModels(text=None))
    assert await client.generate("prompt") == ""


async def test_generate_timeout_is_upstream_error() -> None:
    """Test an expired per-call timeout is an upstream error."""
    config = GeminiConfig(google_api_key="k", llm_timeout_seconds=0.01)
    client = with_fake_models(GeminiClient(config), FakeModels(delay=1.0))

    with pytest.raises(UpstreamError, match="timed out"):
        await client.generate("prompt")


class FakeAio:
    """Stand-in for ``genai.Client(...).aio`` that records closing."""

    def __init__(self) -> None:
        self.models = FakeModels()
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


async def test_exit_closes_async_transport(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test leaving the context closes the SDK's async client."""
    aio = FakeAio()
    monkeypatch.setattr(
        "personalens.llm.client.genai.Client", lambda api_key: SimpleNamespace(aio=aio)
    )

    async with GeminiClient(GeminiConfig(google_api_key="k")) as client:
        assert await client.generate("prompt") == "{}"
        assert not aio.closed

    assert aio.closed
    assert client.client is None
