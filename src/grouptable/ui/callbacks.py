"""Session listener for the TUI.

Hides how the TUI receives session updates. The bridge is a read-only
observer: it reads the session after each write and mirrors it into widgets.
Uses thread-safe calls so updates also work from thread workers.
"""

import threading
from typing import TYPE_CHECKING, Any

from ..chat.models import EventKind, MessageHandle, SessionEvent, SessionPhase
from .config import STREAM_RENDER_THRESHOLD

if TYPE_CHECKING:
    from textual.app import App

    from ..chat.session import ChatSession
    from .widgets import ChatHistoryWidget, ChatInputBar, LanguagePicker, StatusBar


class SessionBridge:
    """Mirrors session events into the chat, input and status widgets.

    Streaming updates are buffered: a message is re-rendered once at least
    STREAM_RENDER_THRESHOLD characters changed, and anything not shown yet
    is flushed when loading ends.
    """

    def __init__(
        self,
        session: "ChatSession",
        chat: "ChatHistoryWidget",
        input_bar: "ChatInputBar",
        status: "StatusBar",
        picker: "LanguagePicker",
        app: "App | None" = None,
    ) -> None:
        self.session = session
        self.chat = chat
        self.input_bar = input_bar
        self.status = status
        self.picker = picker
        self.app = app
        self._shown: dict[MessageHandle, str] = {}
        self._unsubscribe = None

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def attach(self) -> None:
        """Show the current conversation and start listening."""
        for handle, message in self.session.conversation.items():
            self._add(handle, message)
        self._sync_state()
        self._unsubscribe = self.session.subscribe(self)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __call__(self, event: SessionEvent) -> None:
        if event.kind is EventKind.MESSAGE_APPENDED:
            self._add(event.handle, self.session.conversation.get(event.handle))
        elif event.kind is EventKind.MESSAGE_UPDATED:
            content = self.session.conversation.get(event.handle).content
            shown = self._shown.get(event.handle, "")
            if abs(len(content) - len(shown)) >= STREAM_RENDER_THRESHOLD:
                self._render(event.handle, content)
        elif event.kind is EventKind.STATE_CHANGED:
            if not self.session.state.loading:
                self._flush()
            self._sync_state()

    def _add(self, handle: MessageHandle, message) -> None:
        self._shown[handle] = message.content
        self._call_thread_safe(self.chat.add_message, handle, message)

    def _render(self, handle: MessageHandle, content: str) -> None:
        self._shown[handle] = content
        self._call_thread_safe(self.chat.update_message, handle, content)

    def _flush(self) -> None:
        """Render every message whose latest content is not shown yet."""
        for handle, message in self.session.conversation.items():
            if self._shown.get(handle) != message.content:
                self._render(handle, message.content)

    def _sync_state(self) -> None:
        state = self.session.state
        self._call_thread_safe(self.status.update_status, state=state)
        self._call_thread_safe(self.input_bar.set_busy, state.loading)
        self._call_thread_safe(
            setattr, self.picker, "display", state.phase is SessionPhase.LANGUAGE_SELECT
        )
