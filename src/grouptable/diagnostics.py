"""Diagnostic sink for operator debugging.

Components report through a debug callback ``callback(level, component, message)``
with level one of 'debug', 'info', 'warning', 'error'. The terminal UI routes
the callback into its log panel; everything else defaults to a Rich console
on stderr.
"""

from collections.abc import Callable
from datetime import datetime

from rich.console import Console
from rich.markup import escape

DebugCallback = Callable[[str, str, str], None]


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}


def console_debug_callback(
    console: Console | None = None,
    min_level: str = "warning",
) -> DebugCallback:
    """Create a debug callback that prints to a Rich console.

    Args:
        console: Console to write to (default: a stderr console)
        min_level: Least severe level that is printed

    Returns:
        Callback suitable for ChatSession and StreamingResponseCoordinator
    """
    out = console or Console(stderr=True)
    threshold = LogLevel.from_string(min_level)

    def _callback(level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < threshold:
            return
        style = _LEVEL_STYLES.get(numeric, "white")
        timestamp = datetime.now().strftime("%H:%M:%S")
        out.print(
            f"[dim]{timestamp}[/] [{style}]{LogLevel.name(numeric):<7}[/] "
            f"[bold]{escape(f'[{component}]')}[/bold] {escape(message)}"
        )

    return _callback
