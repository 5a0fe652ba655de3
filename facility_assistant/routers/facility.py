import logging

from fastapi import APIRouter

from facility_assistant.dependencies import ChatDep, FacilityDep
from facility_assistant.schemas.facility import CanonicalFacilityRecord, FacilitySummary
from facility_assistant.schemas.responses import AggregationSummary, RefreshAcceptedResponse
from facility_assistant.schemas.status import SourceStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/facility", response_model=CanonicalFacilityRecord)
async def get_facility(service: FacilityDep) -> CanonicalFacilityRecord:
    return service.get_facility_info()


@router.get("/facility/summary", response_model=FacilitySummary)
async def get_facility_summary(chat: ChatDep) -> FacilitySummary:
    return await chat.summarize_facility()


@router.get("/scraping-status", response_model=dict[str, SourceStatus])
async def get_scraping_status(service: FacilityDep) -> dict[str, SourceStatus]:
    return service.get_source_statuses()


@router.post("/refresh-data", response_model=RefreshAcceptedResponse, status_code=202)
async def refresh_data(service: FacilityDep) -> RefreshAcceptedResponse:
    accepted = service.trigger_cycle()
    return RefreshAcceptedResponse(
        accepted=accepted,
        message="Data refresh initiated" if accepted else "A data refresh is already running",
    )


@router.post("/refresh-data/sync", response_model=AggregationSummary)
async def refresh_data_sync(service: FacilityDep) -> AggregationSummary:
    return await service.run_cycle()
