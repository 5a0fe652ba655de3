from collections.abc import Iterable
from datetime import datetime

from facility_assistant.facility_defaults import default_record
from facility_assistant.schemas.facility import (
    AmenitiesContent,
    BasicInfo,
    BasicInfoContent,
    CanonicalFacilityRecord,
    DescriptionContent,
    FacilityFragment,
    FacilitySource,
    ImagesContent,
    PricingContent,
    SportsContent,
)

# Lowest first: fragments from later entries are applied last and win conflicts
SOURCE_PRIORITY: tuple[FacilitySource, ...] = (
    FacilitySource.social_profile,
    FacilitySource.map_listing,
    FacilitySource.primary_listing,
)


def source_rank(source: str) -> int:
    """Merge rank of a source; unknown sources rank below every known one."""
    try:
        return SOURCE_PRIORITY.index(FacilitySource(source)) + 1
    except ValueError:
        return 0


def _union(base: list[str], extra: list[str]) -> list[str]:
    """Ordered set-union: keeps base order, appends unseen entries."""
    merged = list(base)
    seen = {item.casefold() for item in merged}
    for item in extra:
        key = item.casefold()
        if key not in seen:
            seen.add(key)
            merged.append(item)
    return merged


def merge_order(fragments: Iterable[FacilityFragment]) -> list[FacilityFragment]:
    """Active fragments in application order: source rank, then capture time."""
    return sorted(
        (f for f in fragments if f.active),
        key=lambda f: (source_rank(f.source), f.captured_at, f.fragment_id),
    )


def reconcile(
    fragments: Iterable[FacilityFragment],
    now: datetime | None = None,
) -> CanonicalFacilityRecord:
    """Merge active fragments over the built-in defaults.

    basic_info, pricing and description overwrite field by field (last
    applied wins); sports, amenities and images only ever grow.
    """
    record = default_record(now)

    for fragment in merge_order(fragments):
        content = fragment.content
        if isinstance(content, BasicInfoContent):
            merged = record.basic_info.model_dump()
            merged.update(content.present_fields())
            record.basic_info = BasicInfo.model_validate(merged)
        elif isinstance(content, SportsContent):
            record.sports = _union(record.sports, content.sports)
        elif isinstance(content, PricingContent):
            record.pricing.update(content.prices)
        elif isinstance(content, AmenitiesContent):
            record.amenities = _union(record.amenities, content.amenities)
        elif isinstance(content, ImagesContent):
            record.images = _union(record.images, content.images)
        elif isinstance(content, DescriptionContent):
            record.description = content.description

    return record
