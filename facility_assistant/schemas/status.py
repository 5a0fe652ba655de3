from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class Outcome(StrEnum):
    success = "success"
    error = "error"
    pending = "pending"


class SourceStatus(BaseModel):
    source: str
    last_attempt_at: datetime | None = None
    outcome: Outcome
    error_detail: str | None = None
    fragment_count: int = 0
