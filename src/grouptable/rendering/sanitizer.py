"""Strip step applied to every raw message before rendering.

All markup in a raw message becomes inert text: angle brackets, ampersands
and both quote characters are replaced by character references. The renderer
only ever emits elements it creates itself on top of this text.
"""

import html


def normalize_newlines(text: str) -> str:
    """Convert CRLF and CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def sanitize(text: str) -> str:
    """Make raw message text safe to embed in HTML."""
    return html.escape(normalize_newlines(text), quote=True)
