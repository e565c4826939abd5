"""
GroupTable: a chat assistant that finds restaurants for group bookings.

Replies stream from Gemini into an immutable conversation and are rendered
from a small markdown dialect into safe HTML. Each module hides a specific
design decision.
"""

__version__ = "0.1.0"

from .chat import (
    ChatMessage,
    ChatRole,
    ChatSession,
    ErrorCategory,
    StreamingResponseCoordinator,
    classify,
)
from .rendering import AlreadyRenderedError, MarkdownRenderer, MessagePresenter, render
from .restaurants import Restaurant, load_restaurants

__all__ = [
    "AlreadyRenderedError",
    "ChatMessage",
    "ChatRole",
    "ChatSession",
    "ErrorCategory",
    "MarkdownRenderer",
    "MessagePresenter",
    "Restaurant",
    "StreamingResponseCoordinator",
    "classify",
    "load_restaurants",
    "render",
]
