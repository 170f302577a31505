"""
Domain types for bars and their happy hours.
Single source of truth for the stored document shape and the API.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class WeekDay(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


WEEKDAYS: tuple[WeekDay, ...] = tuple(WeekDay)


class Deal(BaseModel):
    item: str = ""
    description: str = ""
    deal: str = ""


class HappyHourEntry(BaseModel):
    """One happy-hour session of a bar.

    ``id`` is generated when the entry is created and never changes; it keys the
    entry's PDF menu in the object store. ``start_time``/``end_time`` are wall-clock
    times carried in a datetime whose date part is meaningless.
    """

    id: str
    name: str = ""
    # Older documents store the weekday list under "day"
    days: list[WeekDay] = Field(default_factory=list, validation_alias=AliasChoices("days", "day"))
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    drinks: list[str] = Field(default_factory=list)
    deals: list[Deal] = Field(default_factory=list)
    deals_summary: str = ""

    @field_validator("days", "drinks", "deals", mode="before")
    @classmethod
    def _null_list(cls, value):
        return [] if value is None else value

    @field_validator("deals_summary", "name", mode="before")
    @classmethod
    def _null_text(cls, value):
        return "" if value is None else value


class Address(BaseModel):
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    full_address: str = ""


class Bar(BaseModel):
    id: str
    name: str = ""
    hero_image_url: str = ""
    address: Address = Field(default_factory=Address)
    phone_number: str = ""
    website: str = ""
    happy_hours: list[HappyHourEntry] = Field(default_factory=list)

    @field_validator("happy_hours", mode="before")
    @classmethod
    def _null_happy_hours(cls, value):
        return [] if value is None else value

    def entry_ids(self) -> list[str]:
        return [hh.id for hh in self.happy_hours]

    def find_entry(self, entry_id: str) -> Optional[HappyHourEntry]:
        for hh in self.happy_hours:
            if hh.id == entry_id:
                return hh
        return None
