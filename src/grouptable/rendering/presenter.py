"""Per-message render cache for display surfaces."""

from collections import OrderedDict

from markupsafe import Markup

from ..chat.models import ChatMessage, ChatRole
from .renderer import MarkdownRenderer


class MessagePresenter:
    """Renders messages at most once for each distinct raw content.

    While a reply streams, every update is a new content value and is
    rendered once; redraws of unchanged messages hit the cache.
    """

    def __init__(self, renderer: MarkdownRenderer | None = None, max_entries: int = 256):
        self._renderer = renderer or MarkdownRenderer()
        self._max_entries = max_entries
        self._cache: OrderedDict[tuple[ChatRole, str], Markup] = OrderedDict()

    @property
    def renderer(self) -> MarkdownRenderer:
        return self._renderer

    def present(self, message: ChatMessage) -> Markup:
        key = (message.role, message.content)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        html = self._renderer.render(message.content)
        self._cache[key] = html
        while len(self._cache) > self._max_entries:
            self._cache.popitem(last=False)
        return html

    def present_all(self, messages) -> list[Markup]:
        return [self.present(message) for message in messages]

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
