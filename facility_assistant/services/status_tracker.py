import logging
from datetime import datetime, timezone

from facility_assistant.schemas.status import Outcome, SourceStatus
from facility_assistant.store import MemoryStore

logger = logging.getLogger(__name__)


class StatusTracker:
    def __init__(self, store: MemoryStore):
        self._store = store

    def record_outcome(
        self,
        source: str,
        outcome: Outcome,
        error_detail: str | None = None,
        fragment_count: int = 0,
    ) -> SourceStatus:
        """Replace the source's status row with a fully-formed new one."""
        status = SourceStatus(
            source=source,
            last_attempt_at=datetime.now(timezone.utc),
            outcome=outcome,
            error_detail=error_detail if outcome == Outcome.error else None,
            fragment_count=fragment_count,
        )
        logger.debug("Status for %s: %s (%d fragments)", source, outcome, fragment_count)
        return self._store.upsert_status(status)

    def mark_pending(self, sources: list[str]) -> None:
        """Seed a pending row for sources never attempted before."""
        for source in sources:
            if self._store.get_status(source) is None:
                self._store.upsert_status(
                    SourceStatus(source=source, outcome=Outcome.pending)
                )

    def snapshot(self) -> dict[str, SourceStatus]:
        return self._store.snapshot_status()
