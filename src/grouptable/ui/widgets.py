"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Language choice buttons
- Input history management
- Chat message rendering and in-place streaming updates
- Log rendering and level filtering
"""

from datetime import datetime

from rich.markup import escape
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, RichLog, Static, TextArea

from ..chat.locales import SUPPORTED_LANGUAGES
from ..chat.models import ChatMessage, ChatRole, MessageHandle, SessionPhase, SessionState
from .config import LOG_TIMESTAMP_FORMAT, LogLevel
from .formatting import message_header, render_message


def copy_text(widget, text: str, label: str) -> None:
    """Copy text to the system clipboard, falling back to the terminal (OSC 52)."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{label} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} copied (terminal)", timeout=2)


class LanguagePicker(Horizontal):
    """Row of buttons, one per supported chat language."""

    class Selected(Message):
        """Message sent when the user picks a language."""

        def __init__(self, language: str) -> None:
            super().__init__()
            self.language = language

    def compose(self):
        for index, language in enumerate(SUPPORTED_LANGUAGES):
            yield Button(language, id=f"lang-{index}", classes="language-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        index = int(event.button.id.removeprefix("lang-"))
        self.post_message(self.Selected(SUPPORTED_LANGUAGES[index]))


class ClickableMessage(Vertical):
    """A chat message container that copies its raw content when clicked."""

    def __init__(self, message: ChatMessage, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message = message
        self._body = Static(render_message(message.role, message.content), classes="message-content")

    @property
    def content(self) -> str:
        return self._message.content

    def compose(self):
        timestamp = datetime.now().strftime("%H:%M:%S")
        yield Static(f"{message_header(self._message.role)} [{timestamp}]", classes="message-header", markup=False)
        yield self._body

    def set_content(self, content: str) -> None:
        """Replace the displayed content."""
        self._message = self._message.model_copy(update={"content": content})
        self._body.update(render_message(self._message.role, content))

    def on_click(self, event: Click) -> None:
        event.stop()
        if self._message.content:
            copy_text(self, self._message.content, "Message")


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Edited(Message):
        """Message sent when the typed text changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Submit message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        # Disable cursor line highlighting to remove visual artifacts
        text_area.highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.post_message(self.Edited(event.text_area.text))

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        value = self.query_one("#chat-input", TextArea).text.strip()
        if value:
            self.post_message(self.Submitted(value))

    def accept(self, value: str) -> None:
        """Record a sent value in the history and clear the input."""
        if not self._history or self._history[-1] != value:
            self._history.append(value)
        self._history_index = -1
        self.query_one("#chat-input", TextArea).text = ""

    def set_busy(self, busy: bool) -> None:
        """Disable the Send button while a reply is streaming."""
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class StatusBar(Static):
    """One-line summary of the session: phase, language, streaming state."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._state = SessionState()
        self._restaurant_count = 0
        self._tokens: int | None = None

    def on_mount(self) -> None:
        self._update_display()

    def update_status(
        self,
        state: SessionState | None = None,
        restaurant_count: int | None = None,
        tokens: int | None = None,
    ) -> None:
        """Update any subset of the displayed values."""
        if state is not None:
            self._state = state
        if restaurant_count is not None:
            self._restaurant_count = restaurant_count
        if tokens is not None:
            self._tokens = tokens
        self._update_display()

    def _update_display(self) -> None:
        if self._state.phase is SessionPhase.LANGUAGE_SELECT:
            phase = "[bold yellow]Choose a language[/]"
        elif self._state.loading:
            phase = "[bold cyan]Receiving reply...[/]"
        else:
            phase = "[bold green]Ready[/]"

        parts = [
            phase,
            f"[bold magenta]Language:[/] {escape(self._state.selected_language)}",
            f"[bold blue]Restaurants:[/] {self._restaurant_count}",
        ]
        if self._tokens is not None:
            parts.append(f"[dim]Tokens: {self._tokens:,}[/]")
        self.update("  ".join(parts))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history, one container per conversation message."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._containers: dict[int, ClickableMessage] = {}

    def add_message(self, handle: MessageHandle, message: ChatMessage) -> None:
        """Mount a container for a newly appended message."""
        border_class = "user-message" if message.role is ChatRole.USER else "assistant-message"
        container = ClickableMessage(message, classes=f"chat-message {border_class}")
        self._containers[handle.index] = container
        self.mount(container)
        self.border_subtitle = f"{len(self._containers)} messages"
        self.scroll_end(animate=False)

    def update_message(self, handle: MessageHandle, content: str) -> None:
        """Re-render the message addressed by handle."""
        container = self._containers.get(handle.index)
        if container is None:
            return
        container.set_content(content)
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last non-empty assistant response."""
        for container in reversed(list(self._containers.values())):
            if container.has_class("assistant-message") and container.content:
                return container.content
        return None


class DebugPanel(RichLog):
    """Log panel for diagnostics with level filtering.

    Shows timestamped messages from the session, the coordinator and the
    backend. Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Diagnostics"

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "LLM": "magenta",
        "Session": "green",
        "Export": "bright_blue",
    }

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<7}[/] "
            f"[{comp_color}]{escape(f'[{component}]')}[/] {escape(message)}"
        )

    def route(self, level: str, component: str, message: str) -> None:
        """Debug callback entry point: callback(level, component, message)."""
        self.log_entry(component, message, LogLevel.from_string(level))

    def info(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.INFO)

    def error(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        copy_text(self, text, "Log")
