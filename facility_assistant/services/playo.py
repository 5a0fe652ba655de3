import logging
import re

from bs4 import BeautifulSoup

from facility_assistant import facility_defaults as defaults
from facility_assistant.exceptions.custom import ExtractionError
from facility_assistant.mappers.fragment_builder import (
    detect_amenities,
    detect_sports,
    sport_mentions,
)
from facility_assistant.schemas.facility import FacilitySource
from facility_assistant.schemas.scraped import ScrapedFacility
from facility_assistant.services.sources import SourceExtractor

logger = logging.getLogger(__name__)

IMAGE_HOST = "playo.gumlet.io"

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")
_REVIEWS_RE = re.compile(r"\((\d+)\s*ratings?\s*\)", re.IGNORECASE)
_INLINE_RATING_RE = re.compile(r"(\d(?:\.\d+)?)\s*\(\s*(\d+)\s*ratings?\s*\)", re.IGNORECASE)
_HOURS_RE = re.compile(
    r"\b\d{1,2}(?::\d{2})?\s*[AP]M\s*[-–]\s*\d{1,2}(?::\d{2})?\s*[AP]M\b",
    re.IGNORECASE,
)
_PIN_RE = re.compile(r"\b\d{6}\b")
_PRICE_RE = re.compile(
    r"₹\s?[\d,]+(?:\s*onwards)?(?:\s*(?:per|/)\s*(?:session|hour|hr|person))?",
    re.IGNORECASE,
)


def _normalize_phone(phone: str) -> str:
    """Normalize an Indian number to "+91 XXXXXXXXXX"; other numbers to "+digits"."""
    digits = "".join(c for c in phone if c.isdigit())
    if len(digits) == 11 and digits.startswith("0"):
        digits = digits[1:]
    if len(digits) == 10:
        return f"+91 {digits}"
    if len(digits) == 12 and digits.startswith("91"):
        return f"+91 {digits[2:]}"
    return f"+{digits}" if digits else ""


def _pair_prices(text: str) -> list[tuple[str, str]]:
    """Pair each price in text with the closest sport named before it.

    A price with no sport before it goes to the first sport named after it.
    """
    mentions = sport_mentions(text)
    if not mentions:
        return []
    pairs = []
    for m in _PRICE_RE.finditer(text):
        before = [name for pos, name in mentions if pos < m.start()]
        sport = before[-1] if before else mentions[0][1]
        pairs.append((sport, " ".join(m.group(0).split())))
    return pairs


def _clean(text: str | None) -> str | None:
    if not text:
        return None
    collapsed = " ".join(text.split())
    return collapsed or None


class PlayoExtractor(SourceExtractor):
    """Primary listing: the facility's public Playo venue page."""

    source = FacilitySource.primary_listing

    def parse(self, raw: str) -> ScrapedFacility:
        if not raw or not raw.strip():
            raise ExtractionError(self.source, "empty document")

        soup = BeautifulSoup(raw, "html.parser")
        text = soup.get_text(separator=" ")
        if not text.strip():
            raise ExtractionError(self.source, "document has no text")

        data = ScrapedFacility()

        h1 = soup.find("h1")
        if h1:
            data.name = _clean(h1.get_text())
            sibling = h1.find_next_sibling()
            if sibling:
                data.locality = _clean(sibling.get_text())

        data.rating, data.review_count = self._extract_rating(soup, text)

        if m := _HOURS_RE.search(text):
            data.hours = " ".join(m.group(0).split()).replace("–", "-")

        data.address = self._extract_address(soup)
        data.phone = self._extract_phone(soup)
        data.sports = detect_sports(text)
        data.pricing = self._extract_pricing(soup)
        data.amenities = detect_amenities(text)
        data.images = self._extract_images(soup)
        data.description = self._extract_description(soup)

        logger.info(
            "Parsed listing %s: name=%s, sports=%d, prices=%d, images=%d",
            self.url, data.name, len(data.sports), len(data.pricing), len(data.images),
        )
        return data

    def fallback_data(self) -> ScrapedFacility:
        return ScrapedFacility(
            name=defaults.FACILITY_NAME,
            locality=defaults.LOCALITY,
            address=defaults.ADDRESS,
            phone=defaults.PHONE,
            rating=defaults.RATING,
            review_count=defaults.REVIEW_COUNT,
            hours=defaults.HOURS,
            coordinates=defaults.COORDINATES,
            sports=list(defaults.DEFAULT_SPORTS),
            pricing=dict(defaults.DEFAULT_PRICING),
            amenities=list(defaults.DEFAULT_AMENITIES),
            description=defaults.DESCRIPTION,
            source_url=self.url,
        )

    @staticmethod
    def _extract_rating(soup: BeautifulSoup, text: str) -> tuple[float | None, int | None]:
        rating: float | None = None
        reviews: int | None = None

        star = soup.find(class_="fa-star")
        if star and star.parent:
            star_text = star.parent.get_text(separator=" ")
            if m := _NUMBER_RE.search(star_text):
                rating = float(m.group(1))
            if m := _REVIEWS_RE.search(star_text):
                reviews = int(m.group(1))
        elif m := _INLINE_RATING_RE.search(text):
            rating = float(m.group(1))
            reviews = int(m.group(2))

        if rating is not None and not 0 <= rating <= 5:
            logger.debug("Discarding out-of-range rating %s", rating)
            rating = None
        return rating, reviews

    @staticmethod
    def _extract_address(soup: BeautifulSoup) -> str | None:
        tag = soup.find("address") or soup.find(attrs={"itemprop": "address"})
        if tag:
            return _clean(tag.get_text(separator=" "))

        # Fallback: a comma-separated line carrying a 6-digit PIN code
        for node in soup.find_all(string=_PIN_RE):
            line = _clean(str(node))
            if line and "," in line:
                return line
        return None

    @staticmethod
    def _extract_phone(soup: BeautifulSoup) -> str | None:
        for a in soup.find_all("a", href=True):
            href = a["href"]
            if href.startswith("tel:"):
                phone = _normalize_phone(href[4:])
                if len(phone) >= 8:
                    return phone
        return None

    @staticmethod
    def _extract_pricing(soup: BeautifulSoup) -> dict[str, str]:
        """Map each priced sport to the first price descriptor seen near it.

        A text node that names sports itself is paired on its own; a bare
        price node borrows the text of its parent, then its grandparent.
        """
        pricing: dict[str, str] = {}
        for node in soup.find_all(string=_PRICE_RE):
            pairs = _pair_prices(str(node))
            parent = node.parent
            for context in (parent, parent.parent if parent else None):
                if pairs or context is None:
                    break
                pairs = _pair_prices(context.get_text(separator=" "))
            for sport, price in pairs:
                pricing.setdefault(sport.lower(), price)
        return pricing

    @staticmethod
    def _extract_images(soup: BeautifulSoup) -> list[str]:
        images: list[str] = []
        for img in soup.find_all("img", src=True):
            src = img["src"]
            if IMAGE_HOST in src and src not in images:
                images.append(src)
        return images

    @staticmethod
    def _extract_description(soup: BeautifulSoup) -> str | None:
        for attrs in ({"name": "description"}, {"property": "og:description"}):
            meta = soup.find("meta", attrs=attrs)
            if meta and meta.get("content"):
                return _clean(meta["content"])
        return None
