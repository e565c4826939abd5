from abc import ABC, abstractmethod
from typing import Any

from .models import GenerationRequest, StreamingResponse


class ProviderConfigurationError(RuntimeError):
    """The provider cannot issue requests (e.g. no API key); raised per request."""


class LLMProvider(ABC):
    """Backend that turns one conversation turn into a stream of text deltas.

    A provider owns its client and authentication, builds the system
    instruction from the request's restaurants and language, and converts
    the history into its own message format.

    Errors surface as exceptions from ``generate_response_stream`` or from
    iterating the returned stream; the chat coordinator classifies them.
    There is no retry at this level.

    Use as an async context manager so the client is closed:
        async with provider:
            stream = await provider.generate_response_stream(request)
    """

    @abstractmethod
    async def generate_response_stream(self, request: GenerationRequest) -> StreamingResponse:
        """Issue the request and return the reply stream.

        Args:
            request: Prior history, latest user text, dataset and language

        Returns:
            StreamingResponse of StreamChunk deltas; token usage is available
            as ``stream.usage`` once iteration finished

        Raises:
            ProviderConfigurationError: If the provider is not configured
            Exception: Backend errors raised by the client library
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        # httpx may report a closed loop while shutting down its transport
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
