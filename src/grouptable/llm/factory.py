from typing import Any

from .base import LLMProvider
from .providers import GeminiProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Build the named backend provider.

    Args:
        provider: Backend name; 'gemini' (alias 'google') is the only one
        **config: Keyword arguments for the provider class:
            api_key (None makes every request fail with a configuration
            error), model, temperature, use_search

    Returns:
        Provider ready for ``generate_response_stream``

    Raises:
        ValueError: For any other backend name

    Examples:
        >>> llm = create_llm_provider("gemini", api_key="...", model="gemini-2.5-pro")
    """
    name = provider.lower()

    if name in ("gemini", "google"):
        config.setdefault("api_key", None)
        return GeminiProvider(**config)

    raise ValueError(f"Unsupported provider: {provider}. Only 'gemini' is available")
