"""Loading of the restaurant dataset.

Hidden design decisions:
- The dataset ships as a YAML file inside the package
- Records are validated into frozen Restaurant models once per path
"""

from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import Restaurant

_DATA_FILE = Path(__file__).parent / "restaurants.yaml"


class DatasetError(ValueError):
    """Raised when a restaurant dataset file cannot be read or validated."""


@lru_cache(maxsize=8)
def _load(path: Path) -> tuple[Restaurant, ...]:
    try:
        with open(path, encoding="utf-8") as f:
            records = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise DatasetError(f"Cannot read restaurant dataset {path}: {e}") from e

    if not isinstance(records, list):
        raise DatasetError(f"Restaurant dataset {path} must be a list of records")

    try:
        return tuple(Restaurant.model_validate(record) for record in records)
    except ValidationError as e:
        raise DatasetError(f"Invalid restaurant record in {path}: {e}") from e


def load_restaurants(path: str | Path | None = None) -> tuple[Restaurant, ...]:
    """Load the restaurant dataset.

    Args:
        path: YAML file to read (None uses the packaged dataset)

    Returns:
        Tuple of validated restaurants, in file order

    Raises:
        DatasetError: If the file is missing, malformed or has invalid records
    """
    return _load(Path(path) if path is not None else _DATA_FILE)


def restaurants_for_city(restaurants: Sequence[Restaurant], city: str) -> list[Restaurant]:
    """Filter restaurants by city, ignoring case and surrounding whitespace."""
    wanted = city.strip().casefold()
    return [r for r in restaurants if r.city.casefold() == wanted]
