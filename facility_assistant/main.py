import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from facility_assistant.config import Settings
from facility_assistant.exceptions.custom import StorageError
from facility_assistant.exceptions.handlers import storage_error_handler
from facility_assistant.routers.chat import router as chat_router
from facility_assistant.routers.facility import router as facility_router
from facility_assistant.services.chat import ChatService
from facility_assistant.services.facility_data import FacilityDataService
from facility_assistant.services.fetcher import SourceFetcher
from facility_assistant.services.generator import ResponseGenerator
from facility_assistant.services.google_maps import GoogleMapsExtractor
from facility_assistant.services.instagram import InstagramExtractor
from facility_assistant.services.playo import PlayoExtractor
from facility_assistant.services.scheduler import AggregationScheduler
from facility_assistant.services.status_tracker import StatusTracker
from facility_assistant.store import MemoryStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=30.0) as client:
        store = MemoryStore(max_fragments=settings.max_fragments)
        fetcher = SourceFetcher(
            client,
            max_retries=settings.fetch_max_retries,
            base_delay=settings.fetch_base_delay,
            timeout=settings.fetch_timeout,
        )
        sources = [
            PlayoExtractor(settings.playo_url),
            InstagramExtractor(settings.instagram_url),
            GoogleMapsExtractor(settings.google_maps_url),
        ]
        facility = FacilityDataService(store, fetcher, sources, StatusTracker(store))
        generator = ResponseGenerator(
            settings.anthropic_api_key,
            model=settings.anthropic_model,
            timeout=settings.generation_timeout,
        )

        app.state.store = store
        app.state.facility_service = facility
        app.state.chat_service = ChatService(store, facility, generator)

        # Store is ready: kick off the first best-effort cycle
        scheduler = AggregationScheduler(
            facility,
            interval=settings.refresh_interval_seconds,
            run_on_start=settings.aggregate_on_startup,
        )
        scheduler.start()
        app.state.scheduler = scheduler

        try:
            yield
        finally:
            await scheduler.stop()


app = FastAPI(title="Facility Assistant", lifespan=lifespan)

app.add_exception_handler(StorageError, storage_error_handler)

app.include_router(chat_router)
app.include_router(facility_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
