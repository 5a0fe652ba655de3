from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from facility_assistant.schemas.status import Outcome


class SourceResult(BaseModel):
    source: str
    outcome: Outcome
    fragment_count: int
    used_fallback: bool = False
    error_detail: str | None = None


class AggregationSummary(BaseModel):
    started_at: datetime
    finished_at: datetime
    succeeded: int
    failed: int
    results: list[SourceResult]


class RefreshAcceptedResponse(BaseModel):
    accepted: bool
    message: str
