"""Data models for the chat session.

These models are immutable values. Every change to a conversation or to the
session state produces a new value through the transition methods below, so
a reader holding an older value never observes a partial update.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .locales import DEFAULT_LANGUAGE


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole = Field(description="Role of the message sender")
    content: str = Field(default="", description="Content of the message")


class MessageHandle(BaseModel):
    """Stable reference to a message, captured when it is appended."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Position of the message in its conversation")


class Conversation(BaseModel):
    """Ordered, append-mostly sequence of chat messages (oldest first)."""

    model_config = ConfigDict(frozen=True)

    messages: tuple[ChatMessage, ...] = Field(default=())

    def __len__(self) -> int:
        return len(self.messages)

    def get(self, handle: MessageHandle) -> ChatMessage:
        """Get the message a handle points at.

        Raises:
            IndexError: If the handle does not belong to this conversation
        """
        if handle.index >= len(self.messages):
            raise IndexError(f"No message at index {handle.index}")
        return self.messages[handle.index]

    def items(self) -> list[tuple[MessageHandle, ChatMessage]]:
        """All messages paired with their handles, oldest first."""
        return [(MessageHandle(index=i), message) for i, message in enumerate(self.messages)]

    def append(self, message: ChatMessage) -> tuple["Conversation", MessageHandle]:
        """Return a conversation with the message appended, plus its handle."""
        handle = MessageHandle(index=len(self.messages))
        return self.model_copy(update={"messages": self.messages + (message,)}), handle

    def replace_content(self, handle: MessageHandle, content: str) -> "Conversation":
        """Return a conversation where the handled message carries new content."""
        updated = self.get(handle).model_copy(update={"content": content})
        messages = list(self.messages)
        messages[handle.index] = updated
        return self.model_copy(update={"messages": tuple(messages)})

    def before(self, handle: MessageHandle) -> tuple[ChatMessage, ...]:
        """Messages that precede the handled message."""
        return self.messages[:handle.index]


class SessionPhase(str, Enum):
    """Coarse conversational state of a session."""

    LANGUAGE_SELECT = "language_select"  # Initial: waiting for a language choice
    CHATTING = "chatting"                # Terminal: free conversation


class SessionState(BaseModel):
    """Scalar session fields."""

    model_config = ConfigDict(frozen=True)

    phase: SessionPhase = Field(default=SessionPhase.LANGUAGE_SELECT)
    selected_language: str = Field(default=DEFAULT_LANGUAGE)
    loading: bool = Field(default=False, description="True while one send is in flight")
    pending_input: str = Field(default="", description="Text typed but not yet sent")


class EventKind(str, Enum):
    """What changed in a session write."""

    MESSAGE_APPENDED = "message_appended"
    MESSAGE_UPDATED = "message_updated"
    STATE_CHANGED = "state_changed"


@dataclass(frozen=True)
class SessionEvent:
    """Notification delivered to listeners after a session write."""

    kind: EventKind
    handle: MessageHandle | None = None
