from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FacilitySource(StrEnum):
    primary_listing = "primary_listing"
    social_profile = "social_profile"
    map_listing = "map_listing"


class FragmentCategory(StrEnum):
    basic_info = "basic_info"
    sports = "sports"
    pricing = "pricing"
    amenities = "amenities"
    images = "images"
    description = "description"


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


# --- Fragment payloads (one shape per category) ---


class BasicInfoContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Literal["basic_info"] = "basic_info"
    name: str | None = None
    locality: str | None = None
    address: str | None = None
    phone: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    review_count: int | None = Field(default=None, ge=0)
    hours: str | None = None
    coordinates: Coordinates | None = None

    def present_fields(self) -> dict:
        """Fields carrying a value, without the category tag."""
        return self.model_dump(exclude={"category"}, exclude_none=True)


class SportsContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Literal["sports"] = "sports"
    sports: list[str] = []


class PricingContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Literal["pricing"] = "pricing"
    prices: dict[str, str] = {}  # sport (lowercase) -> price descriptor


class AmenitiesContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Literal["amenities"] = "amenities"
    amenities: list[str] = []


class ImagesContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Literal["images"] = "images"
    images: list[str] = []


class DescriptionContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Literal["description"] = "description"
    description: str


FragmentContent = Annotated[
    Union[
        BasicInfoContent,
        SportsContent,
        PricingContent,
        AmenitiesContent,
        ImagesContent,
        DescriptionContent,
    ],
    Field(discriminator="category"),
]


class FacilityFragment(BaseModel):
    """One source's contribution to one category. Never mutated once stored."""

    model_config = ConfigDict(frozen=True)

    fragment_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    source: FacilitySource
    content: FragmentContent
    captured_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    active: bool = True

    @property
    def category(self) -> FragmentCategory:
        return FragmentCategory(self.content.category)


# --- Canonical record ---


class BasicInfo(BaseModel):
    name: str
    locality: str
    address: str
    phone: str
    rating: float = Field(ge=0, le=5)
    review_count: int = Field(ge=0)
    hours: str
    coordinates: Coordinates | None = None


class Coaching(BaseModel):
    available: bool
    schedule: list[str] = []
    programs: list[str] = []


class BookingChannel(BaseModel):
    name: str
    url: str | None = None


class CanonicalFacilityRecord(BaseModel):
    basic_info: BasicInfo
    sports: list[str]  # unique, stable display order
    pricing: dict[str, str]
    amenities: list[str]
    coaching: Coaching
    images: list[str]
    description: str
    highlights: list[str]
    booking_channels: list[BookingChannel]
    reconciled_at: datetime


class FacilitySummary(BaseModel):
    summary: str
    generated: bool
