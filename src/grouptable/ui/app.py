"""Main Textual TUI application.

Orchestrates the UI components and wires them to the chat session and the
streaming coordinator.
"""

import asyncio
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header
from textual.worker import Worker, get_current_worker

from ..chat import ChatSession, SessionPhase, StreamingResponseCoordinator
from ..llm import LLMProvider
from ..rendering import MarkdownRenderer, MessagePresenter, render_transcript
from ..restaurants import Restaurant
from .callbacks import SessionBridge
from .config import APP_TITLE, EXPORT_FILENAME_FORMAT, THEME, LogLevel
from .styles import APP_CSS
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    LanguagePicker,
    StatusBar,
    copy_text,
)


class ReservationApp(App):
    """Textual TUI for group reservation chat."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "cancel_reply", "Cancel"),
        Binding("ctrl+s", "export_transcript", "Export"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        llm: LLMProvider,
        restaurants: Sequence[Restaurant],
        log_level: str | None = None,
        group_cards: bool = True,
        export_dir: Path | None = None,
        model_name: str | None = None,
        language: str | None = None,
    ) -> None:
        super().__init__()
        self._language = language
        self._llm = llm
        self._restaurants = tuple(restaurants)
        self._log_level = log_level
        self._export_dir = export_dir or Path.cwd()
        self._model_name = model_name or getattr(llm, "model", "unknown")
        self._session = ChatSession()
        self._coordinator = StreamingResponseCoordinator(self._session, llm, self._restaurants)
        self._presenter = MessagePresenter(MarkdownRenderer(group_cards=group_cards))
        self._bridge: SessionBridge | None = None
        self._current_worker: Worker | None = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield LanguagePicker(id="language-picker")
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")

        with Vertical(id="bottom-bar"):
            yield StatusBar(id="status")
            yield ChatInputBar(id="chat-input-bar")

        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.theme = THEME
        self.sub_title = f"{self._model_name} | {len(self._restaurants)} restaurants"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._session.set_debug_callback(log_panel.route)
        self._coordinator.set_debug_callback(log_panel.route)

        # Configure log panel if --log-level was passed
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._bridge = SessionBridge(
            self._session,
            chat=self.query_one("#chat-history", ChatHistoryWidget),
            input_bar=self.query_one("#chat-input-bar", ChatInputBar),
            status=self.query_one("#status", StatusBar),
            picker=self.query_one("#language-picker", LanguagePicker),
            app=self,
        )
        self._bridge.attach()
        self.query_one("#status", StatusBar).update_status(restaurant_count=len(self._restaurants))
        if self._language:
            self._session.select_language(self._language)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        if self._bridge is not None:
            self._bridge.detach()

    def on_language_picker_selected(self, event: LanguagePicker.Selected) -> None:
        """Start chatting in the chosen language."""
        if self._session.select_language(event.language):
            self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_chat_input_bar_edited(self, event: ChatInputBar.Edited) -> None:
        self._session.set_pending_input(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._session.state.phase is SessionPhase.LANGUAGE_SELECT:
            self.notify("Choose a language first", severity="warning", timeout=3)
            return
        if self._session.state.loading:
            self.notify("Wait for the current reply", severity="warning", timeout=2)
            return

        self.query_one("#chat-input-bar", ChatInputBar).accept(event.value)
        self._send(event.value)

    # Not exclusive: an exclusive worker would cancel the reply in flight.
    # The coordinator's loading flag drops overlapping sends instead.
    @work(group="send")
    async def _send(self, text: str) -> None:
        """Run one send operation as a background async worker."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        status = self.query_one("#status", StatusBar)
        worker = get_current_worker()
        if not self._coordinator.loading:
            self._current_worker = worker

        try:
            accepted = await self._coordinator.send_message(text)
        except asyncio.CancelledError:
            self.notify("Reply cancelled", severity="warning", timeout=2)
            raise
        finally:
            if self._current_worker is worker:
                self._current_worker = None

        if not accepted:
            log_panel.info("TUI", "Send dropped: empty input or reply in progress")
            return

        usage = self._coordinator.last_usage
        if usage:
            status.update_status(tokens=usage.get("total_tokens", 0))

    def action_cancel_reply(self) -> None:
        """Cancel the reply being streamed."""
        if self._current_worker and self._current_worker.is_running:
            self._current_worker.cancel()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_export_transcript(self) -> None:
        """Write the conversation as a standalone HTML page."""
        path = self._export_dir / datetime.now().strftime(EXPORT_FILENAME_FORMAT)
        log_panel = self.query_one("#debug-panel", DebugPanel)
        try:
            page = render_transcript(self._session.messages, self._presenter)
            path.write_text(str(page), encoding="utf-8")
        except OSError as e:
            log_panel.error("Export", f"Failed to write {path}: {e}")
            self.notify(f"Export failed: {e}", severity="error", timeout=5)
            return
        log_panel.info("Export", f"Transcript written to {path}")
        self.notify(f"Saved {path.name}", timeout=3)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            copy_text(self, response, "Response")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    llm: LLMProvider,
    restaurants: Sequence[Restaurant],
    log_level: str | None = None,
    group_cards: bool = True,
    language: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        llm: LLM provider instance
        restaurants: Dataset sent with every request
        log_level: Log level for panel (debug/info/warning/error), None to hide
        group_cards: Group restaurant cards in exported transcripts
        language: Chat language to select at start, None to show the buttons
    """
    app = ReservationApp(
        llm=llm,
        restaurants=restaurants,
        log_level=log_level,
        group_cards=group_cards,
        language=language,
    )
    async with llm:
        try:
            await app.run_async()
        except (KeyboardInterrupt, asyncio.CancelledError):
            pass
