"""Restaurant dataset module.

Provides the static, read-only list of partner restaurants.
"""

from .data import DatasetError, load_restaurants, restaurants_for_city
from .models import WEEKDAYS, Restaurant

__all__ = [
    "DatasetError",
    "Restaurant",
    "WEEKDAYS",
    "load_restaurants",
    "restaurants_for_city",
]
