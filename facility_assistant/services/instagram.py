import logging
from urllib.parse import urlparse

from facility_assistant import facility_defaults as defaults
from facility_assistant.schemas.facility import FacilitySource
from facility_assistant.schemas.scraped import ScrapedFacility
from facility_assistant.services.sources import SourceExtractor

logger = logging.getLogger(__name__)


def is_instagram_url(url: str) -> bool:
    """Check if URL points to an Instagram profile."""
    parsed = urlparse(url)
    return parsed.netloc in ("www.instagram.com", "instagram.com")


class InstagramExtractor(SourceExtractor):
    """Social profile.

    Instagram blocks anonymous scraping, so this source serves a curated
    profile summary instead of fetching the page.
    """

    source = FacilitySource.social_profile
    requires_fetch = False

    def __init__(self, url: str):
        super().__init__(url)
        if not is_instagram_url(url):
            logger.warning("Social profile URL is not an Instagram URL: %s", url)

    def parse(self, raw: str) -> ScrapedFacility:
        return self.fallback_data()

    def fallback_data(self) -> ScrapedFacility:
        return ScrapedFacility(
            name=defaults.FACILITY_NAME,
            description=(
                "Multi-sport facility in Horamavu, Bengaluru offering Basketball, "
                "Pickleball, Skating, and Calisthenics"
            ),
            sports=list(defaults.DEFAULT_SPORTS),
            source_url=self.url,
        )
