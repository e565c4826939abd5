"""Standalone HTML transcript of a conversation.

The page template is a literal; every value placed into it goes through
Markup.format, which escapes plain strings and keeps rendered messages.
"""

from collections.abc import Iterable
from datetime import datetime

from markupsafe import Markup

from ..chat.models import ChatMessage, ChatRole
from .presenter import MessagePresenter

DEFAULT_TITLE = "Grupne rezervacije"

ROLE_LABELS = {
    ChatRole.USER: "Agent",
    ChatRole.ASSISTANT: "Asistent",
    ChatRole.SYSTEM: "Sustav",
}

_PAGE = Markup("""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; max-width: 52rem; margin: 2rem auto; color: #1f2328; }}
.message {{ margin: 1rem 0; padding: 0.75rem 1rem; border-radius: 8px; }}
.message.user {{ background: #e8f0fe; }}
.message.assistant {{ background: #f6f8fa; }}
.message header {{ font-size: 0.8rem; font-weight: bold; color: #57606a; }}
.restaurant-card {{ border: 1px solid #d0d7de; border-radius: 8px; padding: 0.5rem 1rem;
  margin: 0.75rem 0; background: #fff; break-inside: avoid; page-break-inside: avoid; }}
.restaurant-card h3 {{ margin-top: 0.25rem; }}
.action-links {{ display: inline-flex; gap: 0.5rem; }}
.action-links .divider {{ color: #8c959f; }}
blockquote {{ border-left: 3px solid #d0d7de; margin-left: 0; padding-left: 0.75rem; color: #57606a; }}
@media print {{ .message {{ background: none; }} a {{ color: inherit; }} }}
</style>
</head>
<body>
<h1>{title}</h1>
<p class="generated">{generated}</p>
{body}
</body>
</html>
""")

_MESSAGE = Markup('<section class="message {role}"><header>{label}</header>{content}</section>\n')


def render_transcript(
    messages: Iterable[ChatMessage],
    presenter: MessagePresenter | None = None,
    title: str = DEFAULT_TITLE,
    generated_at: datetime | None = None,
) -> Markup:
    """Build a complete HTML page for the given messages.

    Empty messages (an unfilled placeholder) are skipped.

    Args:
        messages: Conversation messages in display order
        presenter: Presenter used to render each message (default: new one)
        title: Page title, escaped
        generated_at: Timestamp shown under the title (default: now)

    Returns:
        The page as Markup
    """
    presenter = presenter or MessagePresenter()
    generated_at = generated_at or datetime.now()

    body = Markup("").join(
        _MESSAGE.format(
            role=message.role.value,
            label=ROLE_LABELS[message.role],
            content=presenter.present(message),
        )
        for message in messages
        if message.content
    )
    return _PAGE.format(
        title=title,
        generated=generated_at.strftime("%Y-%m-%d %H:%M"),
        body=body,
    )
