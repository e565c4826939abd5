"""System prompt template for the reservation assistant.

The template ships with the package as system.txt; a prompts/system.txt in the
working directory replaces it without reinstalling.
"""

import json
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

from ..restaurants import Restaurant

_PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Return the text of prompts/{name}.txt, preferring the working directory.

    Raises:
        FileNotFoundError: If neither location has the file
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8")

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8")

    raise FileNotFoundError(
        f"No prompt named {name!r} in {local_path.parent} or {package_path.parent}"
    )


def build_system_prompt(restaurants: Sequence[Restaurant], language: str) -> str:
    """Fill the system prompt template with the dataset and the chat language.

    Args:
        restaurants: Restaurants the assistant may recommend
        language: Language every reply must be written in

    Returns:
        System instruction text for the backend
    """
    restaurant_data = json.dumps(
        [r.to_prompt_dict() for r in restaurants],
        ensure_ascii=False,
    )
    return load_prompt("system").format(language=language, restaurant_data=restaurant_data)


def clear_cache() -> None:
    """Forget cached templates so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "build_system_prompt",
    "clear_cache",
    "load_prompt",
]
