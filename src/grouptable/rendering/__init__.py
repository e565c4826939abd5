"""Markdown to safe HTML rendering.

Module structure:
- sanitizer.py: Escape step run on every raw message
- blocks.py: Block segmentation and card grouping
- inline.py: Named inline stages in their fixed order
- renderer.py: Pipeline and the single trust boundary
- presenter.py: Per-message render cache
- transcript.py: Standalone HTML page export
"""

from .blocks import (
    Block,
    BulletList,
    Card,
    Heading,
    Paragraph,
    Quote,
    Rule,
    group_cards,
    segment_blocks,
)
from .inline import INLINE_STAGES, InlineStage, apply_inline
from .presenter import MessagePresenter
from .renderer import AlreadyRenderedError, MarkdownRenderer, render, trust_markup
from .sanitizer import sanitize
from .transcript import render_transcript

__all__ = [
    "AlreadyRenderedError",
    "Block",
    "BulletList",
    "Card",
    "Heading",
    "INLINE_STAGES",
    "InlineStage",
    "MarkdownRenderer",
    "MessagePresenter",
    "Paragraph",
    "Quote",
    "Rule",
    "apply_inline",
    "group_cards",
    "render",
    "render_transcript",
    "sanitize",
    "segment_blocks",
    "trust_markup",
]
