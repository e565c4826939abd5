"""Tests for the console diagnostic sink."""
from io import StringIO

from rich.console import Console

from grouptable.diagnostics import LogLevel, console_debug_callback


def make_console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=200, no_color=True), buffer


class TestLogLevel:
    """Tests for LogLevel."""

    def test_ordering(self):
        """Test that verbosity decreases with the numeric value."""
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR

    def test_from_string(self):
        """Test parsing, with DEBUG for unknown names."""
        assert LogLevel.from_string("ERROR") == LogLevel.ERROR
        assert LogLevel.from_string("chatty") == LogLevel.DEBUG
        assert LogLevel.name(LogLevel.WARNING) == "WARNING"


class TestConsoleDebugCallback:
    """Tests for console_debug_callback."""

    def test_threshold(self):
        """Test that entries below the minimum level are dropped."""
        console, buffer = make_console()
        callback = console_debug_callback(console)

        callback("info", "Session", "quiet")
        callback("error", "LLM", "boom")

        output = buffer.getvalue()
        assert "quiet" not in output
        assert "boom" in output
        assert "[LLM]" in output

    def test_markup_is_not_interpreted(self):
        """Test that brackets in messages are printed literally."""
        console, buffer = make_console()
        callback = console_debug_callback(console, min_level="debug")

        callback("debug", "Render", "[red]not styled[/red]")

        assert "[red]not styled[/red]" in buffer.getvalue()
