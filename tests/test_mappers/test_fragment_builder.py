from datetime import datetime, timezone

from facility_assistant.facility_defaults import DEFAULT_SPORTS
from facility_assistant.mappers.fragment_builder import (
    build_fragments,
    detect_amenities,
    detect_sports,
    match_sports,
    sport_mentions,
)
from facility_assistant.schemas.facility import FacilitySource, FragmentCategory
from facility_assistant.schemas.scraped import ScrapedFacility


def test_detect_sports_case_insensitive_and_deduplicated():
    text = "BASKETBALL courts, basketball coaching and Pickleball nights"
    assert detect_sports(text) == ["Basketball", "Pickleball"]


def test_detect_sports_uses_display_order():
    assert match_sports("futsal, skateboarding and basketball") == [
        "Basketball", "Skating", "Football",
    ]


def test_detect_sports_defaults_when_none_found():
    assert detect_sports("A lovely venue") == list(DEFAULT_SPORTS)
    assert match_sports("A lovely venue") == []


def test_sport_mentions_in_reading_order():
    assert sport_mentions("Futsal or basketball, then football") == [
        (0, "Football"), (10, "Basketball"), (27, "Football"),
    ]
    assert sport_mentions("A lovely venue") == []


def test_detect_amenities():
    assert detect_amenities("Free parking, clean washrooms") == ["Parking", "Washroom"]


def test_build_fragments_one_per_non_empty_category():
    scraped = ScrapedFacility(
        name="Arena",
        sports=["Basketball"],
        pricing={"Basketball ": " ₹700 "},
        images=[],
        amenities=["  "],
    )
    captured = datetime(2025, 1, 1, tzinfo=timezone.utc)
    fragments = build_fragments(FacilitySource.primary_listing, scraped, captured)

    categories = [f.category for f in fragments]
    assert categories == [
        FragmentCategory.basic_info,
        FragmentCategory.sports,
        FragmentCategory.pricing,
    ]
    assert all(f.source == FacilitySource.primary_listing for f in fragments)
    assert all(f.captured_at == captured for f in fragments)
    assert fragments[2].content.prices == {"basketball": "₹700"}


def test_build_fragments_empty_scrape_yields_nothing():
    assert build_fragments(FacilitySource.map_listing, ScrapedFacility()) == []


def test_build_fragments_deduplicates_collections():
    scraped = ScrapedFacility(images=["https://a/1.jpg", "https://a/1.jpg", "https://a/2.jpg"])
    (fragment,) = build_fragments(FacilitySource.primary_listing, scraped)
    assert fragment.content.images == ["https://a/1.jpg", "https://a/2.jpg"]
