"""Inline formatting stages.

The stages run in a fixed order over one sanitized fragment. Each stage may
only add elements; no stage removes or re-escapes what an earlier one built.
Links are restricted to http(s) targets.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

ANCHOR_ATTRS = 'target="_blank" rel="noopener noreferrer"'

# A URL character that does not start one of the escapes the sanitizer emits
_URL_CHAR = r"(?:(?!&quot;|&#x27;|&lt;|&gt;)[^\s<>\"()\[\]*])"
_URL = rf"https?://{_URL_CHAR}+"
_LABEL = r"[^\]\n]+"

_ACTION_LINKS = re.compile(
    rf"\[(?P<map_label>{_LABEL})\]\((?P<map_url>{_URL})\)"
    r"\s*\|\s*"
    rf"\*\*\[(?P<book_label>{_LABEL})\]\((?P<book_url>{_URL})\)\*\*"
)
# The body never starts or ends with "*", so "***x***" nests as <em><strong>
_BOLD = re.compile(r"\*\*(?=[^\s*])(.+?)(?<=[^\s*])\*\*")
# The body may hold a whole <strong> element but never half of one
_ITALIC = re.compile(
    r"(?<![*\w])\*(?=[^\s*])((?:[^*\n<]|<strong>[^<*\n]*</strong>)+?)(?<=\S)\*(?![*\w])"
)
_LINK = re.compile(rf"\[(?P<label>{_LABEL})\]\((?P<url>{_URL})\)")
_AUTOLINK = re.compile(
    r"(?P<anchor><a\s[^>]*>.*?</a>)"
    rf"|(?P<url>{_URL})"
)
_TRAILING_PUNCTUATION = ".,;:!?"


@dataclass(frozen=True)
class InlineStage:
    """One named, pure inline transformation."""

    name: str
    apply: Callable[[str], str]

    def __call__(self, fragment: str) -> str:
        return self.apply(fragment)


def anchor(url: str, label: str, css_class: str) -> str:
    return f'<a href="{url}" {ANCHOR_ATTRS} class="{css_class}">{label}</a>'


def _action_links(fragment: str) -> str:
    def _replace(match: re.Match) -> str:
        map_link = anchor(match["map_url"], match["map_label"], "map-link")
        booking_link = anchor(
            match["book_url"], f"<strong>{match['book_label']}</strong>", "booking-link"
        )
        return (
            '<span class="action-links">'
            f'{map_link}<span class="divider">|</span>{booking_link}'
            "</span>"
        )

    return _ACTION_LINKS.sub(_replace, fragment)


def _bold(fragment: str) -> str:
    return _BOLD.sub(r"<strong>\1</strong>", fragment)


def _italic(fragment: str) -> str:
    return _ITALIC.sub(r"<em>\1</em>", fragment)


def _links(fragment: str) -> str:
    return _LINK.sub(lambda m: anchor(m["url"], m["label"], "link"), fragment)


def _autolink(fragment: str) -> str:
    """Wrap bare URLs in anchors.

    One scan matches either a complete anchor built by an earlier stage, which
    is kept unchanged, or a bare URL. A URL inside an existing anchor is
    therefore never wrapped a second time.
    """

    def _replace(match: re.Match) -> str:
        if match["anchor"]:
            return match["anchor"]
        url = match["url"].rstrip(_TRAILING_PUNCTUATION)
        trailing = match["url"][len(url):]
        if url.endswith("://"):
            return match["url"]
        return anchor(url, url, "autolink") + trailing

    return _AUTOLINK.sub(_replace, fragment)


ACTION_LINKS = InlineStage("action_links", _action_links)
BOLD = InlineStage("bold", _bold)
ITALIC = InlineStage("italic", _italic)
LINKS = InlineStage("links", _links)
AUTOLINK = InlineStage("autolink", _autolink)

INLINE_STAGES: tuple[InlineStage, ...] = (ACTION_LINKS, BOLD, ITALIC, LINKS, AUTOLINK)


def apply_inline(fragment: str, stages: Sequence[InlineStage] = INLINE_STAGES) -> str:
    """Run the inline stages over one fragment, in order."""
    for stage in stages:
        fragment = stage(fragment)
    return fragment
