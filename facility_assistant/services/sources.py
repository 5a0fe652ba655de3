import logging

from facility_assistant.mappers.fragment_builder import build_fragments
from facility_assistant.schemas.facility import FacilityFragment, FacilitySource
from facility_assistant.schemas.scraped import ScrapedFacility

logger = logging.getLogger(__name__)

class SourceExtractor:
    """Turns one source's raw content into facility fragments.

    Subclasses implement ``parse`` and ``fallback_data``. Sources that cannot
    be scraped set ``requires_fetch = False`` and serve their curated
    fallback data directly.
    """

    source: FacilitySource
    requires_fetch: bool = True

    def __init__(self, url: str):
        self.url = url

    def extract(self, raw: str) -> list[FacilityFragment]:
        """Parse raw content into fragments. Never raises; returns [] on failure."""
        try:
            scraped = self.parse(raw)
        except Exception:
            logger.exception("Extraction failed for %s (%s)", self.source, self.url)
            return []
        scraped.source_url = self.url
        return build_fragments(self.source, scraped)

    def fallback_fragments(self) -> list[FacilityFragment]:
        return build_fragments(self.source, self.fallback_data())

    def parse(self, raw: str) -> ScrapedFacility:
        raise NotImplementedError

    def fallback_data(self) -> ScrapedFacility:
        raise NotImplementedError
