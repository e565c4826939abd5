from collections.abc import AsyncIterator, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..restaurants import Restaurant


class StreamChunk(BaseModel):
    """One text delta of a streamed reply."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Text fragment appended to the reply")


class HistoryEntry(BaseModel):
    """A prior conversation turn in the backend's role vocabulary."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"] = Field(description="Backend role of the turn")
    text: str = Field(description="Turn text")


class GenerationRequest(BaseModel):
    """Everything the backend needs to produce the next reply."""

    model_config = ConfigDict(frozen=True)

    history: tuple[HistoryEntry, ...] = Field(
        default=(),
        description="Prior turns, oldest first, without the latest user message"
    )
    latest_user_text: str = Field(description="The message being answered")
    restaurants: Sequence[Restaurant] = Field(
        default=(),
        description="Dataset the reply must be grounded in"
    )
    language: str = Field(description="Language every reply must be written in")


class StreamingResponse:
    """Wrapper for streaming LLM responses that captures usage info.

    Acts as an async iterator for text chunks while storing token usage
    that becomes available at the end of the stream.

    Usage:
        stream = await provider.generate_response_stream(request)
        async for chunk in stream:
            print(chunk.text, end="")
        # After iteration, usage is available
        print(stream.usage)  # {"prompt_tokens": 100, "completion_tokens": 50, ...}
    """

    def __init__(self, async_iter: AsyncIterator[StreamChunk]):
        """Initialize with an async iterator of chunks.

        Args:
            async_iter: Async iterator yielding StreamChunk values
        """
        self._iter = async_iter
        self._usage: dict[str, Any] | None = None

    @property
    def usage(self) -> dict[str, Any] | None:
        """Get token usage info (available after iteration completes)."""
        return self._usage

    def set_usage(self, usage: dict[str, Any]) -> None:
        """Set token usage info (called by provider at end of stream)."""
        self._usage = usage

    def __aiter__(self) -> "StreamingResponse":
        """Return self as async iterator."""
        return self

    async def __anext__(self) -> StreamChunk:
        """Get next chunk from the underlying iterator."""
        return await self._iter.__anext__()
