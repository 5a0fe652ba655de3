import asyncio
import logging
from datetime import datetime, timezone

from facility_assistant.exceptions.custom import FetchError
from facility_assistant.mappers.record_reconciler import reconcile
from facility_assistant.schemas.facility import CanonicalFacilityRecord, FacilityFragment
from facility_assistant.schemas.responses import AggregationSummary, SourceResult
from facility_assistant.schemas.status import Outcome, SourceStatus
from facility_assistant.services.fetcher import SourceFetcher
from facility_assistant.services.sources import SourceExtractor
from facility_assistant.services.status_tracker import StatusTracker
from facility_assistant.store import MemoryStore

logger = logging.getLogger(__name__)


class FacilityDataService:
    def __init__(
        self,
        store: MemoryStore,
        fetcher: SourceFetcher,
        sources: list[SourceExtractor],
        status_tracker: StatusTracker | None = None,
    ):
        self._store = store
        self._fetcher = fetcher
        self._sources = sources
        self._status = status_tracker or StatusTracker(store)
        self._cycle_lock = asyncio.Lock()
        self._pending: asyncio.Task | None = None

    @property
    def cycle_running(self) -> bool:
        """True while a cycle holds the lock or a triggered one has not finished."""
        if self._pending is not None and not self._pending.done():
            return True
        return self._cycle_lock.locked()

    # --- Write side: aggregation ---

    async def run_cycle(self) -> AggregationSummary:
        """Harvest every source once. Never raises; cycles never overlap."""
        async with self._cycle_lock:
            started_at = datetime.now(timezone.utc)
            self._status.mark_pending([s.source for s in self._sources])

            gathered = await asyncio.gather(
                *(self._collect(source) for source in self._sources),
                return_exceptions=True,
            )

            results: list[SourceResult] = []
            for source, res in zip(self._sources, gathered):
                if isinstance(res, BaseException):
                    logger.error("Source %s failed unexpectedly: %s", source.source, res)
                    res = SourceResult(
                        source=source.source,
                        outcome=Outcome.error,
                        fragment_count=0,
                        error_detail=f"{type(res).__name__}: {res}",
                    )
                    self._record(res)
                results.append(res)

            succeeded = sum(1 for r in results if r.outcome == Outcome.success)
            logger.info(
                "Aggregation cycle finished: %d/%d sources succeeded",
                succeeded, len(results),
            )
            return AggregationSummary(
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
                succeeded=succeeded,
                failed=len(results) - succeeded,
                results=results,
            )

    def trigger_cycle(self) -> bool:
        """Start a cycle in the background. False if one is already running."""
        if self.cycle_running:
            logger.info("Aggregation cycle already running, trigger ignored")
            return False
        self._pending = asyncio.create_task(self.run_cycle())
        return True

    async def _collect(self, source: SourceExtractor) -> SourceResult:
        """Fetch, extract and persist one source, then record its status."""
        used_fallback = False
        error_detail: str | None = None

        if not source.requires_fetch:
            fragments = source.fallback_fragments()
        else:
            try:
                raw = await self._fetcher.fetch(source.url)
            except FetchError as exc:
                logger.warning(
                    "Fetch exhausted for %s, using fallback data: %s",
                    source.source, exc.message,
                )
                fragments = source.fallback_fragments()
                used_fallback = True
                error_detail = exc.message
            else:
                fragments = source.extract(raw)
                if not fragments:
                    error_detail = "Extraction produced no fragments"

        self._persist(fragments)

        result = SourceResult(
            source=source.source,
            outcome=Outcome.success if fragments else Outcome.error,
            fragment_count=len(fragments),
            used_fallback=used_fallback,
            error_detail=None if fragments else error_detail,
        )
        self._record(result)
        return result

    def _persist(self, fragments: list[FacilityFragment]) -> None:
        if fragments:
            self._store.append_fragments(fragments)

    def _record(self, result: SourceResult) -> None:
        self._status.record_outcome(
            result.source,
            result.outcome,
            error_detail=result.error_detail,
            fragment_count=result.fragment_count,
        )

    # --- Read side ---

    def get_facility_info(self) -> CanonicalFacilityRecord:
        return reconcile(self._store.list_fragments())

    def get_source_statuses(self) -> dict[str, SourceStatus]:
        return self._status.snapshot()
