"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async streaming completions.
Reference: https://github.com/googleapis/python-genai

Note: Gemini signals safety blocks through finish reasons and prompt feedback
instead of raising. This implementation turns them into exceptions so a
blocked reply is reported like any other backend failure.
"""

from collections.abc import AsyncIterator, Callable
from typing import Any

from google import genai
from google.genai import types

from ...prompts import build_system_prompt
from ..base import LLMProvider, ProviderConfigurationError
from ..models import GenerationRequest, HistoryEntry, StreamChunk, StreamingResponse

API_KEY_MISSING_MESSAGE = "API key is not configured."
CONTENT_BLOCKED_MESSAGE = "Candidate was blocked due to safety"


class ContentBlockedError(RuntimeError):
    """Raised when Gemini stops a reply because of its safety filters."""


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization (skipped when no key is configured)
    - Message format conversion to user/model contents
    - System instruction built from the restaurant dataset
    - Google Search grounding for review quotes
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        use_search: bool = True,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key. None keeps the provider usable but makes
                every request fail with a configuration error
            model: Default model (gemini-2.5-flash, gemini-2.5-pro)
            temperature: Sampling temperature
            use_search: Enable the Google Search tool
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._temperature = temperature
        self._use_search = use_search
        self._client = genai.Client(api_key=api_key, **client_kwargs) if api_key else None

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def configured(self) -> bool:
        """Whether an API key was supplied."""
        return self._client is not None

    def _convert_history(
        self,
        history: tuple[HistoryEntry, ...],
        latest_user_text: str,
    ) -> list[types.Content]:
        """Convert history entries plus the latest user text to Gemini contents."""
        contents = [
            types.Content(role=entry.role, parts=[types.Part(text=entry.text)])
            for entry in history
        ]
        contents.append(types.Content(role="user", parts=[types.Part(text=latest_user_text)]))
        return contents

    def _build_config(self, request: GenerationRequest) -> types.GenerateContentConfig:
        tools = [types.Tool(google_search=types.GoogleSearch())] if self._use_search else None
        return types.GenerateContentConfig(
            temperature=self._temperature,
            system_instruction=build_system_prompt(request.restaurants, request.language),
            tools=tools,
        )

    def _extract_content(self, response) -> str:
        """Extract text content from a Gemini response chunk.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Text content or empty string
        """
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)
        return ""

    def _check_blocked(self, response) -> None:
        """Raise ContentBlockedError if the chunk reports a safety block."""
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and feedback.block_reason:
            raise ContentBlockedError(f"{CONTENT_BLOCKED_MESSAGE}: prompt {feedback.block_reason}")
        for candidate in response.candidates or []:
            if candidate.finish_reason == types.FinishReason.SAFETY:
                raise ContentBlockedError(CONTENT_BLOCKED_MESSAGE)

    async def generate_response_stream(self, request: GenerationRequest) -> StreamingResponse:
        """Start a streamed Gemini reply.

        Args:
            request: History, latest user text, dataset and language

        Returns:
            StreamingResponse yielding StreamChunk deltas

        Raises:
            ProviderConfigurationError: If no API key is configured
        """
        if self._client is None:
            raise ProviderConfigurationError(API_KEY_MISSING_MESSAGE)

        contents = self._convert_history(request.history, request.latest_user_text)
        config = self._build_config(request)

        stream = await self._client.aio.models.generate_content_stream(
            model=self._model, contents=contents, config=config
        )

        def _set_usage(usage: dict[str, Any]) -> None:
            response.set_usage(usage)

        response = StreamingResponse(self._stream_generator(stream, _set_usage))
        return response

    async def _stream_generator(
        self,
        stream: AsyncIterator[Any],
        set_usage: Callable[[dict[str, Any]], None],
    ) -> AsyncIterator[StreamChunk]:
        """Yield chunks, then hand the usage to the response that owns this stream."""
        usage = None

        async for chunk in stream:
            # usage_metadata is complete on the final chunk
            if chunk.usage_metadata:
                usage = {
                    "prompt_tokens": chunk.usage_metadata.prompt_token_count or 0,
                    "completion_tokens": chunk.usage_metadata.candidates_token_count or 0,
                    "total_tokens": chunk.usage_metadata.total_token_count or 0,
                }

            self._check_blocked(chunk)
            text = self._extract_content(chunk)
            if text:
                yield StreamChunk(text=text)

        if usage:
            set_usage(usage)

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
