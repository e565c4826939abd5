"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

from ..diagnostics import LogLevel

__all__ = [
    "APP_TITLE",
    "EXPORT_FILENAME_FORMAT",
    "LOG_TIMESTAMP_FORMAT",
    "LogLevel",
    "STREAM_RENDER_THRESHOLD",
    "THEME",
    "TYPING_INDICATOR",
]

APP_TITLE = "GroupTable"
THEME = "catppuccin-mocha"  # Built into Textual

# Streaming configuration
STREAM_RENDER_THRESHOLD = 40  # Characters received before re-rendering a streaming message
TYPING_INDICATOR = "..."  # Shown while the placeholder is still empty

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Transcript export
EXPORT_FILENAME_FORMAT = "grouptable-%Y%m%d-%H%M%S.html"
