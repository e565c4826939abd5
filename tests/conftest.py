"""Pytest configuration and shared fixtures."""
import asyncio
import os
from collections.abc import Sequence

import pytest

from grouptable.chat import ChatSession, StreamingResponseCoordinator
from grouptable.llm import GenerationRequest, LLMProvider, StreamChunk, StreamingResponse
from grouptable.restaurants import load_restaurants


class ScriptedProvider(LLMProvider):
    """In-test provider that replays a fixed script instead of calling a backend.

    Args:
        chunks: Text deltas to stream, in order
        request_error: Raised when the request is issued
        stream_error: Raised after all chunks were streamed
        gate: If set, the stream waits on it before the first chunk
    """

    def __init__(
        self,
        chunks: Sequence[str] = (),
        request_error: BaseException | None = None,
        stream_error: BaseException | None = None,
        gate: asyncio.Event | None = None,
    ):
        self.chunks = list(chunks)
        self.request_error = request_error
        self.stream_error = stream_error
        self.gate = gate
        self.requests: list[GenerationRequest] = []
        self.closed = False

    async def generate_response_stream(self, request: GenerationRequest) -> StreamingResponse:
        self.requests.append(request)
        if self.request_error is not None:
            raise self.request_error
        response = StreamingResponse(self._stream())
        response.set_usage({"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15})
        return response

    async def _stream(self):
        if self.gate is not None:
            await self.gate.wait()
        for chunk in self.chunks:
            yield StreamChunk(text=chunk)
        if self.stream_error is not None:
            raise self.stream_error

    async def close(self) -> None:
        self.closed = True


class DebugRecorder:
    """Debug callback that keeps every (level, component, message) entry."""

    def __init__(self):
        self.entries: list[tuple[str, str, str]] = []

    def __call__(self, level: str, component: str, message: str) -> None:
        self.entries.append((level, component, message))

    def levels(self) -> list[str]:
        return [level for level, _, _ in self.entries]


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture(scope="session")
def restaurants():
    """The packaged restaurant dataset."""
    return load_restaurants()


@pytest.fixture
def recorder():
    return DebugRecorder()


@pytest.fixture
def session(recorder):
    """A session that already left language selection (English)."""
    chat_session = ChatSession(debug_callback=recorder)
    chat_session.select_language("English")
    return chat_session


@pytest.fixture
def make_coordinator(session, restaurants, recorder):
    """Build a coordinator over the shared session for a scripted provider."""
    def _make(provider: ScriptedProvider) -> StreamingResponseCoordinator:
        return StreamingResponseCoordinator(session, provider, restaurants, debug_callback=recorder)
    return _make


@pytest.fixture
def sample_reply():
    """A reply in the markdown dialect the backend produces."""
    return (
        "Evo preporuka za vašu grupu:\n"
        "\n"
        "### 1. Konoba Teranino (*Restoran*)\n"
        "**Kapacitet:** 99 osoba\n"
        "\n"
        "> Izvrsna hrana i ljubazno osoblje.\n"
        "> Preporučujem!\n"
        "\n"
        "* Mediteranska kuhinja\n"
        "* Vegetarijanske opcije\n"
        "\n"
        "[Pogledaj na karti](https://www.google.com/maps/search/?api=1&query=Konoba) | "
        "**[Rezerviraj](https://example.com/teranino-booking)**\n"
        "\n"
        "---\n"
        "\n"
        "### 2. Pizzeria Bepina (*Pizzeria*)\n"
        "Više na https://example.com/bepina."
    )
