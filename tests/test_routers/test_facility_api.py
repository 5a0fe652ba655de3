import asyncio
from unittest.mock import AsyncMock, patch

import respx
from httpx import AsyncClient, Response

from facility_assistant.exceptions.custom import StorageError
from facility_assistant.facility_defaults import FACILITY_NAME

PLAYO_URL = "https://playo.test/venues/flowternity"

VENUE_HTML = (
    "<html><body><h1>Court House</h1><div>Kalkere</div>"
    "<p>Badminton <span>₹400 per hour</span></p></body></html>"
)


def _mock_playo(status=200):
    return respx.get(PLAYO_URL).mock(
        return_value=Response(status, html=VENUE_HTML if status == 200 else "")
    )


async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


async def test_facility_defaults_before_any_cycle(client: AsyncClient):
    resp = await client.get("/api/facility")
    assert resp.status_code == 200
    body = resp.json()
    assert body["basic_info"]["name"] == FACILITY_NAME
    assert body["sports"]
    assert body["coaching"]["available"] is True


async def test_scraping_status_empty_before_any_cycle(client: AsyncClient):
    resp = await client.get("/api/scraping-status")
    assert resp.status_code == 200
    assert resp.json() == {}


@respx.mock
async def test_sync_refresh_updates_record_and_statuses(client: AsyncClient):
    _mock_playo()

    resp = await client.post("/api/refresh-data/sync")
    assert resp.status_code == 200
    summary = resp.json()
    assert summary["succeeded"] == 3
    assert summary["failed"] == 0

    facility = (await client.get("/api/facility")).json()
    assert facility["basic_info"]["name"] == "Court House"
    assert facility["pricing"]["badminton"] == "₹400 per hour"
    assert "Badminton" in facility["sports"]

    statuses = (await client.get("/api/scraping-status")).json()
    assert set(statuses) == {"primary_listing", "social_profile", "map_listing"}
    assert all(s["outcome"] == "success" for s in statuses.values())


@respx.mock
async def test_sync_refresh_with_listing_down_uses_fallback(client: AsyncClient):
    route = _mock_playo(status=503)

    resp = await client.post("/api/refresh-data/sync")

    assert route.call_count == 3
    results = {r["source"]: r for r in resp.json()["results"]}
    assert results["primary_listing"]["outcome"] == "success"
    assert results["primary_listing"]["used_fallback"] is True

    facility = (await client.get("/api/facility")).json()
    assert facility["basic_info"]["name"] == FACILITY_NAME


@respx.mock
async def test_refresh_is_fire_and_forget(app, client: AsyncClient):
    _mock_playo()

    resp = await client.post("/api/refresh-data")
    assert resp.status_code == 202
    assert resp.json()["accepted"] is True

    service = app.state.facility_service
    deadline = asyncio.get_event_loop().time() + 5.0
    while asyncio.get_event_loop().time() < deadline:
        await asyncio.sleep(0.02)
        if not service.cycle_running and service.get_source_statuses():
            break

    statuses = (await client.get("/api/scraping-status")).json()
    assert len(statuses) == 3


async def test_refresh_rejected_while_running(app, client: AsyncClient):
    with patch.object(type(app.state.facility_service), "cycle_running", True):
        resp = await client.post("/api/refresh-data")

    assert resp.status_code == 202
    assert resp.json()["accepted"] is False


async def test_summary_endpoint_falls_back(app, client: AsyncClient):
    with patch.object(
        app.state.chat_service._generator, "generate", new_callable=AsyncMock, return_value=None,
    ):
        resp = await client.get("/api/facility/summary")

    assert resp.status_code == 200
    body = resp.json()
    assert body["generated"] is False
    assert FACILITY_NAME in body["summary"]


async def test_storage_error_maps_to_503(app, client: AsyncClient):
    with patch.object(
        app.state.facility_service, "get_source_statuses", side_effect=StorageError("unavailable"),
    ):
        resp = await client.get("/api/scraping-status")

    assert resp.status_code == 503
    assert "unavailable" in resp.json()["detail"]
