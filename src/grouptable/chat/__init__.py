"""Conversation streaming engine.

Module structure (each module hides a design decision):
- models.py: Immutable messages, conversation and session values
- locales.py: Localized session copy and language fallback
- errors.py: Failure classification and localized error sentences
- session.py: State container with notify-after-write listeners
- coordinator.py: Send operation and stream accumulation
"""

from .coordinator import StreamingResponseCoordinator, to_backend_history
from .errors import ErrorCategory, classify, describe_error
from .locales import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from .models import (
    ChatMessage,
    ChatRole,
    Conversation,
    EventKind,
    MessageHandle,
    SessionEvent,
    SessionPhase,
    SessionState,
)
from .session import ChatSession, InactiveMessageError, SessionListener, StreamingInProgressError

__all__ = [
    "ChatMessage",
    "ChatRole",
    "ChatSession",
    "Conversation",
    "DEFAULT_LANGUAGE",
    "ErrorCategory",
    "EventKind",
    "InactiveMessageError",
    "MessageHandle",
    "SUPPORTED_LANGUAGES",
    "SessionEvent",
    "SessionListener",
    "SessionPhase",
    "SessionState",
    "StreamingInProgressError",
    "StreamingResponseCoordinator",
    "classify",
    "describe_error",
    "to_backend_history",
]
