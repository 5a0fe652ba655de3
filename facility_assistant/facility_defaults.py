"""Built-in, known-good facility values.

Every field of the canonical record starts from here, so the record is
complete even before the first aggregation cycle has stored a fragment.
"""

from datetime import datetime, timezone

from facility_assistant.schemas.facility import (
    BasicInfo,
    BookingChannel,
    CanonicalFacilityRecord,
    Coaching,
    Coordinates,
)

FACILITY_NAME = "FlowTernity Sports"
LOCALITY = "Horamavu, Bengaluru"
ADDRESS = (
    "1456, Old Flour Mill road Dodda Kempaih Layout, Kalkere, Horamavu, "
    "Bengaluru, Karnataka 560043"
)
PHONE = "+91 8123999768"
RATING = 5.0
REVIEW_COUNT = 5
HOURS = "6 AM - 11 PM"
COORDINATES = Coordinates(lat=13.035433, lng=77.670535)

DEFAULT_SPORTS = ("Basketball", "Pickleball", "Skating", "Calisthenics")

DEFAULT_PRICING = {
    "basketball": "₹700 onwards per session",
    "pickleball": "₹700 onwards per session",
}

DEFAULT_AMENITIES = (
    "Parking",
    "20-foot floodlights",
    "8-layer synthetic flooring",
    "International standard courts",
)

COACHING_SCHEDULE = ("Weekends: 8-9 AM, 5-6 PM", "Adults: Tue/Thu 7-8 PM")
COACHING_PROGRAMS = (
    "Basketball Training",
    "Skating Classes",
    "Calisthenics",
    "Summer Camps",
)

DESCRIPTION = (
    "22,000 sq ft multi-sport facility with 2 international standard "
    "basketball courts and various other sports facilities."
)

HIGHLIGHTS = (
    "22,000 sq ft multi-sport facility",
    "2 International Standard Basketball Courts",
    "8-layer synthetic flooring for basketball",
    "20-foot floodlights for night games",
    "2 Pickleball courts (multi-use)",
    "Dedicated skating/skateboarding area",
    "Calisthenics zone",
    "Athlete recovery corner",
    'Inspired by New York\'s "The Cage" with 16-foot metal boundaries',
)

BOOKING_CHANNELS = (
    ("Playo", "https://playo.co/venues/horamavu-bengaluru/flowternity-sports-horamavu-bengaluru"),
    ("Hudle", None),
)


def default_record(now: datetime | None = None) -> CanonicalFacilityRecord:
    """Return a fresh default record. Callers may mutate it freely."""
    return CanonicalFacilityRecord(
        basic_info=BasicInfo(
            name=FACILITY_NAME,
            locality=LOCALITY,
            address=ADDRESS,
            phone=PHONE,
            rating=RATING,
            review_count=REVIEW_COUNT,
            hours=HOURS,
            coordinates=COORDINATES,
        ),
        sports=list(DEFAULT_SPORTS),
        pricing=dict(DEFAULT_PRICING),
        amenities=list(DEFAULT_AMENITIES),
        coaching=Coaching(
            available=True,
            schedule=list(COACHING_SCHEDULE),
            programs=list(COACHING_PROGRAMS),
        ),
        images=[],
        description=DESCRIPTION,
        highlights=list(HIGHLIGHTS),
        booking_channels=[BookingChannel(name=n, url=u) for n, u in BOOKING_CHANNELS],
        reconciled_at=now or datetime.now(timezone.utc),
    )
