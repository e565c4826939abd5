from .gemini import ContentBlockedError, GeminiProvider

__all__ = ["ContentBlockedError", "GeminiProvider"]
