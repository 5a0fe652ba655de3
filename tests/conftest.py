from datetime import datetime, timedelta, timezone

import httpx
import pytest
from httpx import ASGITransport

from facility_assistant.schemas.facility import (
    BasicInfoContent,
    FacilityFragment,
    FacilitySource,
)

PLAYO_URL = "https://playo.test/venues/flowternity"


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    monkeypatch.setenv("PLAYO_URL", PLAYO_URL)
    monkeypatch.setenv("AGGREGATE_ON_STARTUP", "false")
    monkeypatch.setenv("REFRESH_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("FETCH_BASE_DELAY", "0")


@pytest.fixture
async def app(mock_env):
    from facility_assistant.main import app, lifespan

    async with lifespan(app):
        yield app


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def make_fragment():
    def _make(
        source=FacilitySource.primary_listing,
        content=None,
        minutes_ago: int = 0,
        active: bool = True,
    ) -> FacilityFragment:
        return FacilityFragment(
            source=source,
            content=content or BasicInfoContent(name="Test Arena"),
            captured_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
            active=active,
        )

    return _make
