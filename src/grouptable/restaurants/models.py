"""Data models for the restaurant dataset.

The dataset is read-only reference data handed to the backend once per
session. Field aliases keep the camelCase keys the system prompt refers to.
"""

from pydantic import BaseModel, ConfigDict, Field

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class Restaurant(BaseModel):
    """A partner restaurant that accepts group bookings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Restaurant name")
    address: str = Field(description="Street address")
    city: str = Field(description="City or town")
    category: str = Field(description="Kind of venue (Restoran, Pizzeria, Fine Dining, ...)")
    tags: str = Field(default="", description="Comma separated cuisine and diet tags")
    hours: dict[str, str] = Field(default_factory=dict, description="Opening hours keyed by weekday")
    max_capacity: int = Field(alias="maxCapacity", ge=1, description="Largest group the venue seats")
    description: str = Field(default="", description="Marketing blurb, may contain HTML")
    booking_link: str = Field(alias="bookingLink", description="Partner portal booking URL")
    place_id: str | None = Field(default=None, alias="gPlaceId", description="Google place id")

    def seats(self, group_size: int) -> bool:
        """Check whether a group of the given size fits."""
        return group_size <= self.max_capacity

    def to_prompt_dict(self) -> dict:
        """Fields shared with the backend, keyed the way the prompt names them."""
        return self.model_dump(by_alias=True, exclude={"place_id"})
