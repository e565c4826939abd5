"""Unit tests for the restaurant dataset and the system prompt."""
import json

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from grouptable.prompts import build_system_prompt, clear_cache, load_prompt
from grouptable.restaurants import (
    DatasetError,
    Restaurant,
    load_restaurants,
    restaurants_for_city,
)


class TestRestaurant:
    """Tests for the Restaurant model."""

    def test_aliases(self):
        """Test that camelCase keys populate the fields."""
        restaurant = Restaurant.model_validate({
            "name": "Test",
            "address": "Ulica 1",
            "city": "Split",
            "category": "Restoran",
            "maxCapacity": 30,
            "bookingLink": "https://example.com/book",
            "gPlaceId": "abc",
        })
        assert restaurant.max_capacity == 30
        assert restaurant.booking_link == "https://example.com/book"
        assert restaurant.place_id == "abc"

    def test_capacity_must_be_positive(self):
        """Test that a zero capacity is rejected."""
        with pytest.raises(ValidationError):
            Restaurant(
                name="X", address="A", city="C", category="R",
                max_capacity=0, booking_link="https://example.com",
            )

    @given(st.integers(min_value=1, max_value=500))
    def test_seats(self, group_size: int):
        """Property test: a group fits exactly when it is not above capacity."""
        restaurant = Restaurant(
            name="X", address="A", city="C", category="R",
            max_capacity=99, booking_link="https://example.com",
        )
        assert restaurant.seats(group_size) == (group_size <= 99)

    def test_prompt_dict_uses_prompt_keys(self, restaurants):
        """Test the keys shared with the backend."""
        data = restaurants[0].to_prompt_dict()
        assert data["maxCapacity"] == 99
        assert "bookingLink" in data
        assert "gPlaceId" not in data


class TestLoadRestaurants:
    """Tests for dataset loading."""

    def test_packaged_dataset(self, restaurants):
        """Test the shipped restaurants."""
        assert [r.name for r in restaurants] == [
            "Konoba Teranino",
            "Pizzeria Bepina",
            "Restoran Dubrovnik",
            "Vinodol",
            "Zrno Bio Bistro",
        ]

    def test_custom_file(self, tmp_path):
        """Test loading a dataset from a path."""
        path = tmp_path / "data.yaml"
        path.write_text(
            "- name: Bistro\n"
            "  address: Obala 2\n"
            "  city: Zadar\n"
            "  category: Bistro\n"
            "  maxCapacity: 25\n"
            "  bookingLink: https://example.com/bistro\n",
            encoding="utf-8",
        )
        restaurants = load_restaurants(path)
        assert len(restaurants) == 1
        assert restaurants[0].city == "Zadar"

    def test_missing_file(self, tmp_path):
        """Test that a missing file is a dataset error."""
        with pytest.raises(DatasetError):
            load_restaurants(tmp_path / "missing.yaml")

    def test_not_a_list(self, tmp_path):
        """Test that a mapping at the top level is rejected."""
        path = tmp_path / "data.yaml"
        path.write_text("name: Bistro\n", encoding="utf-8")
        with pytest.raises(DatasetError, match="must be a list"):
            load_restaurants(path)

    def test_invalid_record(self, tmp_path):
        """Test that a record without required fields is rejected."""
        path = tmp_path / "data.yaml"
        path.write_text("- name: Bistro\n", encoding="utf-8")
        with pytest.raises(DatasetError, match="Invalid restaurant record"):
            load_restaurants(path)

    def test_for_city(self, restaurants):
        """Test filtering by city ignores case and whitespace."""
        assert [r.name for r in restaurants_for_city(restaurants, " zagreb ")] == [
            "Vinodol",
            "Zrno Bio Bistro",
        ]
        assert restaurants_for_city(restaurants, "Osijek") == []


class TestPrompts:
    """Tests for prompt loading."""

    def test_load_system_prompt(self):
        """Test that the packaged template is found."""
        assert "{restaurant_data}" in load_prompt("system")

    def test_missing_prompt(self):
        """Test that an unknown prompt name raises."""
        with pytest.raises(FileNotFoundError):
            load_prompt("does-not-exist")

    def test_build_system_prompt(self, restaurants):
        """Test that the dataset and language are filled in."""
        prompt = build_system_prompt(restaurants, "Italian")

        assert "{language}" not in prompt
        assert "preferred language as: Italian" in prompt
        data = prompt.split("Restaurant Data: ", 1)[1].split("\n", 1)[0]
        assert [r["name"] for r in json.loads(data)] == [r.name for r in restaurants]

    def test_local_override(self, tmp_path, monkeypatch):
        """Test that ./prompts/<name>.txt takes precedence."""
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "system.txt").write_text("Custom {language} {restaurant_data}", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        clear_cache()
        try:
            assert build_system_prompt([], "English") == "Custom English []"
        finally:
            clear_cache()
