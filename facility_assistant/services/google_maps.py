from facility_assistant import facility_defaults as defaults
from facility_assistant.schemas.facility import FacilitySource
from facility_assistant.schemas.scraped import ScrapedFacility
from facility_assistant.services.sources import SourceExtractor


class GoogleMapsExtractor(SourceExtractor):
    """Map listing.

    Share links redirect through consent pages that cannot be parsed, so the
    pinned location is curated by hand.
    """

    source = FacilitySource.map_listing
    requires_fetch = False

    def parse(self, raw: str) -> ScrapedFacility:
        return self.fallback_data()

    def fallback_data(self) -> ScrapedFacility:
        return ScrapedFacility(
            name=defaults.FACILITY_NAME,
            locality=defaults.LOCALITY,
            address=defaults.ADDRESS,
            coordinates=defaults.COORDINATES,
            source_url=self.url,
        )
