"""Session state container.

Hides how conversation phase, chat language, the loading flag and the message
sequence are stored. All writes go through ChatSession, which swaps in new
immutable values and then notifies listeners. Listeners are read-only
observers (the terminal UI, console printers, tests).
"""

from collections.abc import Callable

from ..diagnostics import DebugCallback
from .errors import ErrorCategory, describe_error
from .locales import LANGUAGE_ECHO, WELCOME_MESSAGE, initial_prompt
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

SessionListener = Callable[[SessionEvent], None]


class StreamingInProgressError(RuntimeError):
    """Raised when a second placeholder is requested while one is streaming."""


class InactiveMessageError(RuntimeError):
    """Raised when content of a message that is not streaming would change."""


class ChatSession:
    """State machine and message store for one chat session.

    Phases: LANGUAGE_SELECT (initial) -> CHATTING (terminal).

    Only the currently streaming assistant placeholder may change after it
    has been appended; it is addressed through the handle returned by
    begin_streaming().
    """

    def __init__(
        self,
        welcome_message: str = WELCOME_MESSAGE,
        debug_callback: DebugCallback | None = None,
    ) -> None:
        self._conversation, _ = Conversation().append(
            ChatMessage(role=ChatRole.ASSISTANT, content=welcome_message)
        )
        self._state = SessionState()
        self._streaming: MessageHandle | None = None
        self._listeners: list[SessionListener] = []
        self._debug_callback = debug_callback

    @property
    def conversation(self) -> Conversation:
        """Current conversation value (immutable snapshot)."""
        return self._conversation

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return self._conversation.messages

    @property
    def state(self) -> SessionState:
        """Current session state value (immutable snapshot)."""
        return self._state

    @property
    def streaming_handle(self) -> MessageHandle | None:
        """Handle of the placeholder being streamed, if any."""
        return self._streaming

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for diagnostic messages.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called after every write.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # A broken observer must not abort the write that already happened
                self._debug("error", "Session", f"Listener failed on {event.kind.value}: {e!r}")

    def _update_state(self, **changes) -> None:
        updated = self._state.model_copy(update=changes)
        if updated == self._state:
            return
        self._state = updated
        self._notify(SessionEvent(EventKind.STATE_CHANGED))

    def select_language(self, language: str) -> bool:
        """Choose the chat language and start chatting.

        Appends a user echo of the choice and the localized assistant prompt.
        Unknown languages get the Croatian prompt. Once the session is
        chatting, further calls are ignored.

        Args:
            language: Language name as offered to the user

        Returns:
            True if the transition happened, False if it was ignored
        """
        if self._state.phase is not SessionPhase.LANGUAGE_SELECT:
            self._debug(
                "warning",
                "Session",
                f"Language already set to {self._state.selected_language}; ignoring {language!r}",
            )
            return False

        self._update_state(selected_language=language, phase=SessionPhase.CHATTING)
        self.append_message(
            ChatMessage(role=ChatRole.USER, content=LANGUAGE_ECHO.format(language=language))
        )
        self.append_message(
            ChatMessage(role=ChatRole.ASSISTANT, content=initial_prompt(language))
        )
        self._debug("info", "Session", f"Language selected: {language}")
        return True

    def append_message(self, message: ChatMessage) -> MessageHandle:
        """Append a finished message and return its handle."""
        self._conversation, handle = self._conversation.append(message)
        self._notify(SessionEvent(EventKind.MESSAGE_APPENDED, handle))
        return handle

    def begin_streaming(self) -> MessageHandle:
        """Append the empty assistant placeholder that a stream will fill.

        Raises:
            StreamingInProgressError: If another placeholder is still streaming
        """
        if self._streaming is not None:
            raise StreamingInProgressError(
                f"Message {self._streaming.index} is still streaming"
            )
        handle = self.append_message(ChatMessage(role=ChatRole.ASSISTANT, content=""))
        self._streaming = handle
        return handle

    def replace_streaming_content(self, handle: MessageHandle, content: str) -> None:
        """Replace the whole content of the streaming placeholder.

        Raises:
            InactiveMessageError: If the handle is not the streaming placeholder
        """
        if handle != self._streaming:
            raise InactiveMessageError(f"Message {handle.index} is not streaming")
        self._conversation = self._conversation.replace_content(handle, content)
        self._notify(SessionEvent(EventKind.MESSAGE_UPDATED, handle))

    def end_streaming(self, handle: MessageHandle) -> None:
        """Freeze the placeholder; later replacements are rejected."""
        if handle == self._streaming:
            self._streaming = None

    def set_loading(self, loading: bool) -> None:
        self._update_state(loading=loading)

    def set_pending_input(self, text: str) -> None:
        """Store text typed by the user but not yet sent."""
        self._update_state(pending_input=text)

    def localize_error(self, category: ErrorCategory) -> str:
        """User-facing sentence for a category in the session language."""
        return describe_error(category, self._state.selected_language)
