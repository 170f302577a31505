from typing import Literal

from pydantic import BaseModel, Field, field_validator

from happyhour.domain import Address, Bar, HappyHourEntry, WeekDay
from happyhour.services.happy_hours import normalize_time


class HappyHourSummary(BaseModel):
    name: str
    days: list[WeekDay]
    time_range: str
    drinks: list[str]
    more_drinks: bool = False


class BarSummary(BaseModel):
    id: str
    name: str
    hero_image_url: str
    neighborhood: str
    full_address: str
    phone_number: str
    website: str
    happy_hours: list[HappyHourSummary]


class BarView(BaseModel):
    """A bar as shown on its detail page: the draft while editing, else the committed copy."""

    bar: Bar
    editing: bool
    has_pending_menu: bool = False
    pending_menu_filename: str | None = None


class HappyHourEntryInput(HappyHourEntry):
    """Edited entry; times may be sent as ``HH:MM`` form values."""

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _form_time(cls, value):
        if isinstance(value, str) and "T" not in value and len(value.strip()) <= 5:
            return normalize_time(value.strip())
        return value


class DraftUpdateRequest(BaseModel):
    name: str = ""
    hero_image_url: str = ""
    address: Address = Field(default_factory=Address)
    phone_number: str = ""
    website: str = ""
    happy_hours: list[HappyHourEntryInput] = Field(default_factory=list)


MenuAnalysisStatus = Literal["reconciled", "empty", "failed"]


class MenuAnalysisResponse(BaseModel):
    status: MenuAnalysisStatus
    added: list[HappyHourEntry] = Field(default_factory=list)
    editing: bool
    detail: str | None = None


class MenuUrlResponse(BaseModel):
    url: str
