"""Tests for FacilityDataService: aggregation cycles and reads."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from facility_assistant.exceptions.custom import FetchError
from facility_assistant.facility_defaults import default_record
from facility_assistant.schemas.facility import FacilitySource, FragmentCategory
from facility_assistant.schemas.status import Outcome
from facility_assistant.services.facility_data import FacilityDataService
from facility_assistant.services.fetcher import SourceFetcher
from facility_assistant.services.google_maps import GoogleMapsExtractor
from facility_assistant.services.instagram import InstagramExtractor
from facility_assistant.services.playo import PlayoExtractor
from facility_assistant.store import MemoryStore

PLAYO_URL = "https://playo.test/venue"

VENUE_HTML = (
    "<html><body><h1>Court House</h1><div>Kalkere</div>"
    "<p>Football <span>₹1,200 per hour</span></p></body></html>"
)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def fetcher():
    return AsyncMock(spec=SourceFetcher)


def _service(store, fetcher, sources=None):
    sources = sources or [
        PlayoExtractor(PLAYO_URL),
        InstagramExtractor("https://www.instagram.com/flowternity_sports/"),
        GoogleMapsExtractor("https://share.google/abc"),
    ]
    return FacilityDataService(store, fetcher, sources)


async def test_cycle_persists_fragments_and_statuses(store, fetcher):
    fetcher.fetch.return_value = VENUE_HTML
    service = _service(store, fetcher)

    summary = await service.run_cycle()

    assert summary.succeeded == 3
    assert summary.failed == 0
    fetcher.fetch.assert_awaited_once_with(PLAYO_URL)

    statuses = service.get_source_statuses()
    assert set(statuses) == {"primary_listing", "social_profile", "map_listing"}
    for source in statuses:
        expected = len(store.list_fragments(source=source))
        assert statuses[source].outcome == Outcome.success
        assert statuses[source].fragment_count == expected > 0


async def test_cycle_result_flows_into_canonical_record(store, fetcher):
    fetcher.fetch.return_value = VENUE_HTML
    service = _service(store, fetcher)
    await service.run_cycle()

    record = service.get_facility_info()
    assert record.basic_info.name == "Court House"
    assert record.basic_info.locality == "Kalkere"
    assert record.pricing["football"] == "₹1,200 per hour"
    assert "Football" in record.sports
    # Defaults survive untouched categories
    assert record.coaching == default_record().coaching


async def test_exhausted_fetch_uses_fallback_and_reports_success(store, fetcher):
    fetcher.fetch.side_effect = FetchError("Failed after 3 attempts: HTTP 503", status_code=503, attempts=3)
    service = _service(store, fetcher, [PlayoExtractor(PLAYO_URL)])

    summary = await service.run_cycle()

    (result,) = summary.results
    fallback_count = len(PlayoExtractor(PLAYO_URL).fallback_fragments())
    assert result.outcome == Outcome.success
    assert result.used_fallback is True
    assert result.fragment_count == fallback_count

    status = service.get_source_statuses()["primary_listing"]
    assert status.outcome == Outcome.success
    assert status.fragment_count == fallback_count
    assert status.error_detail is None


async def test_extraction_failure_records_error(store, fetcher):
    fetcher.fetch.return_value = ""
    service = _service(store, fetcher, [PlayoExtractor(PLAYO_URL)])

    summary = await service.run_cycle()

    assert summary.failed == 1
    status = service.get_source_statuses()["primary_listing"]
    assert status.outcome == Outcome.error
    assert status.fragment_count == 0
    assert status.error_detail == "Extraction produced no fragments"
    assert store.list_fragments() == ()


async def test_full_store_persists_nothing_and_reports_zero(fetcher):
    store = MemoryStore(max_fragments=2)
    fetcher.fetch.return_value = VENUE_HTML
    service = _service(store, fetcher, [PlayoExtractor(PLAYO_URL)])

    summary = await service.run_cycle()

    (result,) = summary.results
    assert result.outcome == Outcome.error
    assert result.fragment_count == 0
    assert "StorageError" in result.error_detail
    assert store.list_fragments(active_only=False) == ()
    assert service.get_source_statuses()["primary_listing"].fragment_count == 0


async def test_one_source_crash_does_not_affect_others(store, fetcher):
    fetcher.fetch.return_value = VENUE_HTML
    broken = GoogleMapsExtractor("https://share.google/abc")
    broken.fallback_fragments = Mock(side_effect=RuntimeError("curation missing"))
    service = _service(store, fetcher, [PlayoExtractor(PLAYO_URL), broken])

    summary = await service.run_cycle()

    statuses = service.get_source_statuses()
    assert statuses["primary_listing"].outcome == Outcome.success
    assert statuses["map_listing"].outcome == Outcome.error
    assert "curation missing" in statuses["map_listing"].error_detail
    assert summary.succeeded == 1
    assert summary.failed == 1


async def test_repeated_cycles_keep_one_active_fragment_per_category(store, fetcher):
    fetcher.fetch.return_value = VENUE_HTML
    service = _service(store, fetcher, [PlayoExtractor(PLAYO_URL)])

    await service.run_cycle()
    first = service.get_facility_info()
    await service.run_cycle()
    second = service.get_facility_info()

    active = store.list_fragments(source=FacilitySource.primary_listing)
    categories = [f.category for f in active]
    assert len(categories) == len(set(categories))
    assert FragmentCategory.basic_info in categories
    assert first.model_dump(exclude={"reconciled_at"}) == second.model_dump(exclude={"reconciled_at"})


async def test_concurrent_cycles_are_serialized(store, fetcher):
    in_flight = 0
    peak = 0

    async def slow_fetch(url):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return VENUE_HTML

    fetcher.fetch.side_effect = slow_fetch
    service = _service(store, fetcher)

    await asyncio.gather(service.run_cycle(), service.run_cycle())

    assert peak == 1
    for status in service.get_source_statuses().values():
        assert status.outcome == Outcome.success
        assert status.last_attempt_at is not None
        assert status.fragment_count > 0


async def test_trigger_cycle_is_fire_and_forget(store, fetcher):
    fetcher.fetch.return_value = VENUE_HTML
    service = _service(store, fetcher)

    assert service.trigger_cycle() is True
    await asyncio.sleep(0)
    assert service.trigger_cycle() is False

    while service.cycle_running:
        await asyncio.sleep(0.01)
    assert len(service.get_source_statuses()) == 3


async def test_triggers_in_same_tick_start_one_cycle(store, fetcher):
    fetcher.fetch.return_value = VENUE_HTML
    service = _service(store, fetcher)

    first = service.trigger_cycle()
    second = service.trigger_cycle()

    assert first is True
    assert second is False
    assert service.cycle_running is True

    while service.cycle_running:
        await asyncio.sleep(0.01)
    fetcher.fetch.assert_awaited_once_with(PLAYO_URL)


def test_facility_info_without_fragments_is_default(store, fetcher):
    record = _service(store, fetcher).get_facility_info()
    assert record.model_dump(exclude={"reconciled_at"}) == default_record().model_dump(exclude={"reconciled_at"})
