from pydantic import BaseModel

from facility_assistant.schemas.facility import Coordinates


class ScrapedFacility(BaseModel):
    """Loose extraction result for one source, before it is split into fragments."""

    name: str | None = None
    locality: str | None = None
    address: str | None = None
    phone: str | None = None  # E.164 when taken from a tel: link
    rating: float | None = None
    review_count: int | None = None
    hours: str | None = None
    coordinates: Coordinates | None = None
    sports: list[str] = []  # canonical display order
    pricing: dict[str, str] = {}
    amenities: list[str] = []
    images: list[str] = []
    description: str | None = None
    source_url: str | None = None
