"""Terminal formatting for chat content.

Hides how messages and the restaurant dataset are turned into Rich
renderables. The HTML pipeline in grouptable.rendering is for browsers and
exported pages; the terminal shows the raw markdown through Rich.
"""

from collections.abc import Sequence

from rich.markdown import Markdown
from rich.table import Table
from rich.text import Text

from ..chat.models import ChatRole
from ..restaurants import WEEKDAYS, Restaurant
from .config import TYPING_INDICATOR

ROLE_LABELS = {
    ChatRole.USER: ("You", ">"),
    ChatRole.ASSISTANT: ("Assistant", "<"),
    ChatRole.SYSTEM: ("System", "*"),
}


def message_header(role: ChatRole) -> str:
    """Header line shown above a message."""
    label, icon = ROLE_LABELS[role]
    return f"{icon} {label}"


def render_message(role: ChatRole, content: str) -> Markdown | Text:
    """Render message content for the terminal.

    Assistant replies are markdown; user text is shown verbatim so that
    nothing the user typed is interpreted.
    """
    if role is ChatRole.ASSISTANT:
        if not content:
            return Text(TYPING_INDICATOR, style="dim")
        return Markdown(content, hyperlinks=True)
    return Text(content, overflow="fold")


def format_hours(restaurant: Restaurant) -> str:
    """Opening hours on one line, in weekday order."""
    return ", ".join(
        f"{day[:3]} {restaurant.hours[day]}" for day in WEEKDAYS if day in restaurant.hours
    )


def restaurant_table(restaurants: Sequence[Restaurant], title: str = "Restaurants") -> Table:
    """Build a Rich table of the dataset."""
    table = Table(title=title, show_lines=True)
    table.add_column("Name", style="bold cyan")
    table.add_column("City")
    table.add_column("Category")
    table.add_column("Seats", justify="right", style="magenta")
    table.add_column("Hours", style="dim")

    for restaurant in restaurants:
        table.add_row(
            restaurant.name,
            restaurant.city,
            restaurant.category,
            str(restaurant.max_capacity),
            format_hours(restaurant),
        )
    return table
