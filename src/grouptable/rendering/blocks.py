"""Block segmentation of sanitized message text.

Hidden design decisions:
- Blocks are separated by one or more blank lines
- A block's kind is decided by its leading token only
- Cards are runs of blocks from one heading up to the next heading

Each block renders itself; inline text is passed through a caller supplied
function so the inline stages stay independent of the block structure.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

Inline = Callable[[str], str]

_BLANK_LINES = re.compile(r"\n(?:[ \t]*\n)+")
_QUOTE_MARKER = re.compile(r"^(?:&gt;|>) ?")
_LIST_MARKER = re.compile(r"^\*(?: |$)")

HEADING_PREFIX = "### "
RULE = "---"
# The sanitizer escapes '>', so a quote arrives as '&gt; '
QUOTE_PREFIXES = ("> ", "&gt; ")
LIST_PREFIX = "* "


@dataclass(frozen=True)
class Heading:
    text: str

    def to_html(self, inline: Inline) -> str:
        return f"<h3>{inline(self.text)}</h3>"


@dataclass(frozen=True)
class Rule:
    def to_html(self, inline: Inline) -> str:
        return "<hr>"


@dataclass(frozen=True)
class Quote:
    lines: tuple[str, ...]

    def to_html(self, inline: Inline) -> str:
        return f"<blockquote>{'<br>'.join(inline(line) for line in self.lines)}</blockquote>"


@dataclass(frozen=True)
class BulletList:
    items: tuple[str, ...]

    def to_html(self, inline: Inline) -> str:
        return "<ul>" + "".join(f"<li>{inline(item)}</li>" for item in self.items) + "</ul>"


@dataclass(frozen=True)
class Paragraph:
    lines: tuple[str, ...]

    def to_html(self, inline: Inline) -> str:
        return f"<p>{'<br>'.join(inline(line) for line in self.lines)}</p>"


@dataclass(frozen=True)
class Card:
    """One recommendation: a heading and the blocks that follow it."""

    blocks: tuple["Block", ...]

    def to_html(self, inline: Inline) -> str:
        inner = "".join(block.to_html(inline) for block in self.blocks)
        return f'<div class="restaurant-card">{inner}</div>'


Block = Union[Heading, Rule, Quote, BulletList, Paragraph, Card]


def split_blocks(text: str) -> list[str]:
    """Split text on blank lines, dropping empty blocks and outer whitespace."""
    return [block.strip() for block in _BLANK_LINES.split(text) if block.strip()]


def classify_block(block: str) -> list[Block]:
    """Turn one blank-line delimited block into block nodes.

    A heading only takes its own line. The lines below it in the same block
    are classified again as a block of their own. A marker line with no text
    ("### " after stripping) is an empty heading.
    """
    first, _, rest = block.partition("\n")
    if first.startswith(HEADING_PREFIX) or first.rstrip() == HEADING_PREFIX.rstrip():
        nodes: list[Block] = [Heading(first[len(HEADING_PREFIX):].strip())]
        rest = rest.strip()
        if rest:
            nodes.extend(classify_block(rest))
        return nodes

    if block == RULE:
        return [Rule()]

    lines = [line.strip() for line in block.split("\n")]

    if block.startswith(QUOTE_PREFIXES):
        return [Quote(tuple(_QUOTE_MARKER.sub("", line) for line in lines))]

    if block.startswith(LIST_PREFIX):
        return [BulletList(tuple(_LIST_MARKER.sub("", line).strip() for line in lines))]

    return [Paragraph(tuple(lines))]


def segment_blocks(text: str) -> list[Block]:
    """Segment sanitized text into an ordered list of blocks."""
    nodes: list[Block] = []
    for block in split_blocks(text):
        nodes.extend(classify_block(block))
    return nodes


def group_cards(blocks: list[Block]) -> list[Block]:
    """Wrap every run starting at a heading, up to the next heading, in a Card.

    Blocks before the first heading stay ungrouped.
    """
    grouped: list[Block] = []
    current: list[Block] | None = None
    for block in blocks:
        if isinstance(block, Heading):
            if current:
                grouped.append(Card(tuple(current)))
            current = [block]
        elif current is not None:
            current.append(block)
        else:
            grouped.append(block)
    if current:
        grouped.append(Card(tuple(current)))
    return grouped
