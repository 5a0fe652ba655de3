from datetime import datetime, timezone

from facility_assistant.facility_defaults import DEFAULT_SPORTS
from facility_assistant.schemas.facility import (
    AmenitiesContent,
    BasicInfoContent,
    DescriptionContent,
    FacilityFragment,
    FacilitySource,
    ImagesContent,
    PricingContent,
    SportsContent,
)
from facility_assistant.schemas.scraped import ScrapedFacility

# Display name -> lowercase keywords; dict order is the display order
SPORT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Basketball": ("basketball",),
    "Pickleball": ("pickleball",),
    "Skating": ("skating", "skateboard"),
    "Calisthenics": ("calisthenics",),
    "Football": ("football", "futsal"),
    "Badminton": ("badminton",),
    "Box Cricket": ("box cricket",),
    "Table Tennis": ("table tennis",),
    "Volleyball": ("volleyball",),
}

AMENITY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Parking": ("parking",),
    "20-foot floodlights": ("floodlight", "flood light"),
    "Drinking Water": ("drinking water",),
    "Washroom": ("washroom", "restroom", "toilet"),
    "Changing Room": ("changing room",),
    "First Aid": ("first aid",),
    "Seating Area": ("seating",),
}


def _scan(text: str, table: dict[str, tuple[str, ...]]) -> list[str]:
    lower = text.lower()
    return [name for name, keywords in table.items() if any(k in lower for k in keywords)]


def match_sports(text: str) -> list[str]:
    """Known sports mentioned in text, in display order."""
    return _scan(text, SPORT_KEYWORDS)


def sport_mentions(text: str) -> list[tuple[int, str]]:
    """Every (offset, sport) keyword occurrence in text, in reading order."""
    lower = text.lower()
    found = []
    for name, keywords in SPORT_KEYWORDS.items():
        for keyword in keywords:
            start = lower.find(keyword)
            while start != -1:
                found.append((start, name))
                start = lower.find(keyword, start + len(keyword))
    return sorted(found)


def detect_sports(text: str) -> list[str]:
    """Like match_sports, but substitutes the default list when nothing is found."""
    return match_sports(text) or list(DEFAULT_SPORTS)


def detect_amenities(text: str) -> list[str]:
    return _scan(text, AMENITY_KEYWORDS)


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(i.strip() for i in items if i and i.strip()))


def build_fragments(
    source: FacilitySource,
    scraped: ScrapedFacility,
    captured_at: datetime | None = None,
) -> list[FacilityFragment]:
    """Split a scrape result into one fragment per non-empty category."""
    captured_at = captured_at or datetime.now(timezone.utc)
    contents = []

    basic = BasicInfoContent(
        name=scraped.name,
        locality=scraped.locality,
        address=scraped.address,
        phone=scraped.phone,
        rating=scraped.rating,
        review_count=scraped.review_count,
        hours=scraped.hours,
        coordinates=scraped.coordinates,
    )
    if basic.present_fields():
        contents.append(basic)

    if sports := _dedupe(scraped.sports):
        contents.append(SportsContent(sports=sports))

    prices = {k.strip().lower(): v.strip() for k, v in scraped.pricing.items() if k.strip() and v.strip()}
    if prices:
        contents.append(PricingContent(prices=prices))

    if amenities := _dedupe(scraped.amenities):
        contents.append(AmenitiesContent(amenities=amenities))

    if images := _dedupe(scraped.images):
        contents.append(ImagesContent(images=images))

    if scraped.description and scraped.description.strip():
        contents.append(DescriptionContent(description=scraped.description.strip()))

    return [
        FacilityFragment(source=source, content=content, captured_at=captured_at)
        for content in contents
    ]
