"""Unit tests for the LLM module."""
from types import SimpleNamespace

import pytest
from google.genai import types

from grouptable.llm import (
    ContentBlockedError,
    GeminiProvider,
    GenerationRequest,
    HistoryEntry,
    LLMProvider,
    ProviderConfigurationError,
    StreamingResponse,
    create_llm_provider,
)
from grouptable.llm.providers.gemini import API_KEY_MISSING_MESSAGE


def chunk(text=None, finish_reason=None, usage=None, block_reason=None):
    """Build an object shaped like a Gemini stream chunk."""
    parts = [SimpleNamespace(text=text)] if text is not None else []
    candidate = SimpleNamespace(
        content=SimpleNamespace(parts=parts),
        finish_reason=finish_reason,
    )
    return SimpleNamespace(
        candidates=[candidate],
        usage_metadata=usage,
        prompt_feedback=SimpleNamespace(block_reason=block_reason) if block_reason else None,
    )


class FakeModels:
    """Stands in for client.aio.models and records the calls.

    Each call streams the next script; the last one is reused.
    """

    def __init__(self, *scripts):
        self._scripts = list(scripts)
        self.calls = []

    async def generate_content_stream(self, **kwargs):
        self.calls.append(kwargs)
        chunks = self._scripts.pop(0) if len(self._scripts) > 1 else self._scripts[0]

        async def _iterate():
            for item in chunks:
                yield item

        return _iterate()


def provider_with(*scripts) -> tuple[GeminiProvider, FakeModels]:
    provider = GeminiProvider(api_key="test-key")
    models = FakeModels(*scripts)
    provider._client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return provider, models


@pytest.fixture
def request_(restaurants):
    return GenerationRequest(
        history=(
            HistoryEntry(role="model", text="Welcome"),
            HistoryEntry(role="user", text="Jezik postavljen na: English"),
        ),
        latest_user_text="Split, 45 people",
        restaurants=restaurants,
        language="English",
    )


class TestLLMProvider:
    """Tests for the provider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestFactory:
    """Tests for create_llm_provider."""

    def test_create_gemini(self):
        """Test creating the Gemini provider."""
        provider = create_llm_provider("gemini", api_key="k", model="gemini-2.5-pro")
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-pro"
        assert provider.configured is True

    def test_create_without_key(self):
        """Test that a missing key still yields a provider."""
        provider = create_llm_provider("Gemini")
        assert provider.configured is False

    def test_unsupported_provider(self):
        """Test that unknown providers are rejected."""
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("openai", api_key="k")


class TestGeminiProvider:
    """Tests for GeminiProvider without network access."""

    @pytest.mark.asyncio
    async def test_missing_key_fails_at_request_time(self, request_):
        """Test the configuration error raised per request."""
        provider = GeminiProvider(api_key=None)
        with pytest.raises(ProviderConfigurationError, match=API_KEY_MISSING_MESSAGE):
            await provider.generate_response_stream(request_)

    @pytest.mark.asyncio
    async def test_streams_text_and_usage(self, request_):
        """Test that chunk texts are yielded and usage captured."""
        usage = SimpleNamespace(prompt_token_count=100, candidates_token_count=7, total_token_count=107)
        provider, models = provider_with([chunk("Hel"), chunk(None), chunk("lo", usage=usage)])

        stream = await provider.generate_response_stream(request_)
        assert isinstance(stream, StreamingResponse)
        texts = [piece.text async for piece in stream]

        assert texts == ["Hel", "lo"]
        assert stream.usage == {"prompt_tokens": 100, "completion_tokens": 7, "total_tokens": 107}
        assert models.calls[0]["model"] == "gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_overlapping_streams_keep_their_usage(self, request_):
        """Test that each stream reports the usage of its own reply."""
        first_usage = SimpleNamespace(prompt_token_count=1, candidates_token_count=1, total_token_count=2)
        second_usage = SimpleNamespace(prompt_token_count=3, candidates_token_count=4, total_token_count=7)
        provider, _ = provider_with([chunk("a", usage=first_usage)], [chunk("b", usage=second_usage)])

        first = await provider.generate_response_stream(request_)
        second = await provider.generate_response_stream(request_)
        assert [piece.text async for piece in second] == ["b"]
        assert [piece.text async for piece in first] == ["a"]

        assert first.usage["total_tokens"] == 2
        assert second.usage["total_tokens"] == 7

    @pytest.mark.asyncio
    async def test_request_contents(self, request_):
        """Test history conversion and the system instruction."""
        provider, models = provider_with([chunk("ok")])

        stream = await provider.generate_response_stream(request_)
        [piece async for piece in stream]

        contents = models.calls[0]["contents"]
        assert [content.role for content in contents] == ["model", "user", "user"]
        assert contents[-1].parts[0].text == "Split, 45 people"

        config = models.calls[0]["config"]
        assert "English" in config.system_instruction
        assert "Konoba Teranino" in config.system_instruction
        assert config.tools[0].google_search is not None

    def test_search_tool_can_be_disabled(self, request_):
        """Test building a config without Google Search."""
        provider = GeminiProvider(api_key=None, use_search=False)
        assert provider._build_config(request_).tools is None

    @pytest.mark.asyncio
    async def test_safety_finish_raises(self, request_):
        """Test that a safety stop becomes an exception."""
        provider, _ = provider_with([chunk("Par"), chunk(None, finish_reason=types.FinishReason.SAFETY)])

        stream = await provider.generate_response_stream(request_)
        with pytest.raises(ContentBlockedError):
            [piece async for piece in stream]

    @pytest.mark.asyncio
    async def test_blocked_prompt_raises(self, request_):
        """Test that a blocked prompt becomes an exception."""
        provider, _ = provider_with([chunk(None, block_reason="SAFETY")])

        stream = await provider.generate_response_stream(request_)
        with pytest.raises(ContentBlockedError):
            [piece async for piece in stream]

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        """Test the async context manager protocol."""
        async with GeminiProvider(api_key=None) as provider:
            assert provider.configured is False


@pytest.mark.integration
class TestGeminiIntegration:
    """Live tests against the Gemini API."""

    @pytest.mark.asyncio
    async def test_live_reply(self, api_keys, request_):
        """Test a real streamed reply."""
        if not api_keys["gemini"]:
            pytest.skip("GEMINI_API_KEY not set")

        async with GeminiProvider(api_key=api_keys["gemini"]) as provider:
            stream = await provider.generate_response_stream(request_)
            text = "".join([piece.text async for piece in stream])

        assert text
