"""Provider factory functions for CLI.

Centralizes creation of the LLM provider, the restaurant dataset and the
renderer from environment variables. Hides configuration details from
command implementations.
"""

import os

import typer
from rich.console import Console

from ..llm import LLMProvider, create_llm_provider
from ..rendering import MarkdownRenderer
from ..restaurants import DatasetError, Restaurant, load_restaurants

DEFAULT_MODEL = "gemini-2.5-flash"

# Default console for output
_console = Console()


def get_api_key() -> str | None:
    """Read the Gemini API key (GEMINI_API_KEY, falling back to API_KEY)."""
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None


def get_llm(console: Console | None = None) -> LLMProvider:
    """Create the Gemini provider from environment variables.

    A missing key is not fatal here: the provider is still created and each
    request fails with a configuration error, which the chat reports as a
    localized message.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance

    Environment variables:
        GEMINI_API_KEY: Gemini API key (fallback: API_KEY)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    api_key = get_api_key()
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, requests will fail[/yellow]")
    model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    return create_llm_provider("gemini", api_key=api_key, model=model)


def get_restaurants(console: Console | None = None) -> tuple[Restaurant, ...]:
    """Load the restaurant dataset.

    Raises:
        typer.Exit: If the dataset cannot be loaded

    Environment variables:
        GROUPTABLE_RESTAURANTS: Path to a YAML dataset (default: packaged file)
    """
    con = console or _console
    try:
        return load_restaurants(os.getenv("GROUPTABLE_RESTAURANTS") or None)
    except DatasetError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def card_grouping_enabled() -> bool:
    """Whether rendered replies group recommendations into cards.

    Environment variables:
        GROUPTABLE_CARD_GROUPING: '0', 'false', 'no' or 'off' disables grouping
    """
    value = os.getenv("GROUPTABLE_CARD_GROUPING", "1").strip().lower()
    return value not in ("0", "false", "no", "off")


def get_renderer(no_cards: bool = False) -> MarkdownRenderer:
    """Create the renderer, honoring --no-cards and the environment."""
    return MarkdownRenderer(group_cards=card_grouping_enabled() and not no_cards)
