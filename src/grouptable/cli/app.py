"""Main CLI application using Typer."""
import asyncio
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..chat import ChatRole, ChatSession, EventKind, SessionEvent, StreamingResponseCoordinator
from ..chat.locales import DEFAULT_LANGUAGE
from ..chat.models import ChatMessage
from ..diagnostics import console_debug_callback
from ..rendering import MessagePresenter, render_transcript
from ..restaurants import restaurants_for_city
from ..ui.formatting import restaurant_table
from .providers import card_grouping_enabled, get_llm, get_renderer, get_restaurants

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="grouptable",
    help="Restaurant group-booking assistant backed by Gemini",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ("debug", "info", "warning", "error")


@app.command()
def chat(
    language: str | None = typer.Option(
        None,
        "--language",
        "-L",
        help="Chat language (skips the language buttons)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
    no_cards: bool = typer.Option(
        False,
        "--no-cards",
        help="Do not group recommendations into cards in exported transcripts"
    ),
):
    """Launch the interactive chat interface."""
    if log_level is not None and log_level.lower() not in LOG_LEVELS:
        console.print(f"[red]Error: Unknown log level: {log_level}[/red]")
        raise typer.Exit(code=1)

    async def _chat():
        from ..ui import run_textual_tui

        llm = get_llm(console)
        restaurants = get_restaurants(console)
        await run_textual_tui(
            llm=llm,
            restaurants=restaurants,
            log_level=log_level,
            group_cards=card_grouping_enabled() and not no_cards,
            language=language,
        )
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def ask(
    question: str = typer.Argument(..., help="Message to send"),
    language: str = typer.Option(
        DEFAULT_LANGUAGE,
        "--language",
        "-L",
        help="Language of the reply"
    ),
    html: bool = typer.Option(
        False,
        "--html",
        help="Print the rendered HTML of the reply after streaming it"
    ),
):
    """Send one message and stream the reply to the console."""
    async def _ask():
        llm = get_llm(err_console)
        restaurants = get_restaurants(err_console)

        session = ChatSession(debug_callback=console_debug_callback(err_console))
        session.select_language(language)
        shown = ""

        def _print_delta(event: SessionEvent) -> None:
            nonlocal shown
            if event.kind is not EventKind.MESSAGE_UPDATED:
                return
            content = session.conversation.get(event.handle).content
            if content.startswith(shown):
                console.print(content[len(shown):], end="", markup=False, highlight=False)
            else:
                # Replaced rather than extended (an error sentence)
                console.print("\n" + content, end="", markup=False, highlight=False)
            shown = content

        session.subscribe(_print_delta)
        async with llm:
            await StreamingResponseCoordinator(
                session, llm, restaurants, debug_callback=console_debug_callback(err_console)
            ).send_message(question)
        console.print()

        if html:
            reply = session.messages[-1]
            typer.echo(str(get_renderer().render(reply.content)))

    asyncio.run(_ask())


@app.command()
def render(
    source: str = typer.Argument(
        "-",
        help="Markdown file to render ('-' reads standard input)"
    ),
    no_cards: bool = typer.Option(
        False,
        "--no-cards",
        help="Do not group recommendations into cards"
    ),
    page: bool = typer.Option(
        False,
        "--page",
        help="Emit a complete HTML page instead of a fragment"
    ),
):
    """Render reply markdown to safe HTML."""
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            console.print(f"[red]Error: File not found: {source}[/red]")
            raise typer.Exit(code=1)
        text = path.read_text(encoding="utf-8")

    renderer = get_renderer(no_cards)
    if page:
        message = ChatMessage(role=ChatRole.ASSISTANT, content=text)
        output = render_transcript([message], MessagePresenter(renderer))
    else:
        output = renderer.render(text)
    typer.echo(str(output))


@app.command()
def restaurants(
    city: str | None = typer.Option(
        None,
        "--city",
        "-c",
        help="Only show restaurants in this city"
    ),
):
    """List the partner restaurants."""
    dataset = get_restaurants(console)
    if city:
        dataset = restaurants_for_city(dataset, city)
        if not dataset:
            console.print(f"[yellow]No restaurants in {city}[/yellow]")
            return
    console.print(restaurant_table(dataset))
    console.print(f"[dim]{len(dataset)} restaurant(s)[/dim]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
