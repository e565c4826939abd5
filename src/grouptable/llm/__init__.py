from .base import LLMProvider, ProviderConfigurationError
from .factory import create_llm_provider
from .models import GenerationRequest, HistoryEntry, StreamChunk, StreamingResponse
from .providers import ContentBlockedError, GeminiProvider

__all__ = [
    "LLMProvider",
    "ProviderConfigurationError",
    "create_llm_provider",
    "GenerationRequest",
    "HistoryEntry",
    "StreamChunk",
    "StreamingResponse",
    "ContentBlockedError",
    "GeminiProvider",
]
