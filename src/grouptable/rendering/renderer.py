"""Markdown subset renderer.

Turns raw chat text (headings, rules, quotes, bullet lists, paragraphs,
bold, italic and links) into a SafeHtml value. The input is sanitized first;
every element in the output is one the renderer created.

SafeHtml is markupsafe's Markup. trust_markup() in this module is the only
place that turns a plain string into Markup, and render() is its only caller.
"""

from collections.abc import Sequence

from markupsafe import Markup

from .blocks import group_cards, segment_blocks
from .inline import INLINE_STAGES, InlineStage, apply_inline
from .sanitizer import sanitize


class AlreadyRenderedError(TypeError):
    """Raised when already trusted HTML is passed back into the renderer."""


def trust_markup(html: str) -> Markup:
    """Mark renderer output as safe HTML.

    Raises:
        AlreadyRenderedError: If the value is already Markup
    """
    if isinstance(html, Markup):
        raise AlreadyRenderedError("Value is already trusted HTML")
    return Markup(html)


class MarkdownRenderer:
    """Renders raw message text to safe HTML.

    Example:
        renderer = MarkdownRenderer()
        html = renderer.render("### Pod Gričkim Topom\\n\\n**80** seats")
    """

    def __init__(
        self,
        group_cards: bool = True,
        stages: Sequence[InlineStage] = INLINE_STAGES,
    ):
        """Initialize the renderer.

        Args:
            group_cards: Wrap each heading and its following blocks in a card
            stages: Inline stages, applied in order to every text fragment
        """
        self._group_cards = group_cards
        self._stages = tuple(stages)

    @property
    def groups_cards(self) -> bool:
        return self._group_cards

    def _inline(self, fragment: str) -> str:
        return apply_inline(fragment, self._stages)

    def render(self, raw_text: str) -> Markup:
        """Render raw text to safe HTML.

        Raises:
            AlreadyRenderedError: If raw_text is already rendered Markup
        """
        if isinstance(raw_text, Markup):
            raise AlreadyRenderedError("render() expects raw text, got Markup")

        blocks = segment_blocks(sanitize(raw_text))
        if self._group_cards:
            blocks = group_cards(blocks)
        return trust_markup("".join(block.to_html(self._inline) for block in blocks))


_default_renderer = MarkdownRenderer()


def render(raw_text: str) -> Markup:
    """Render with the default renderer (card grouping on)."""
    return _default_renderer.render(raw_text)
