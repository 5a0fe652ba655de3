import asyncio
import logging

from facility_assistant.services.facility_data import FacilityDataService

logger = logging.getLogger(__name__)


class AggregationScheduler:
    """Runs aggregation cycles on a fixed interval.

    ``start`` is called by the process owner once the store exists; the first
    cycle runs immediately (if ``run_on_start``), then every ``interval``
    seconds. An interval of 0 disables the periodic loop.
    """

    def __init__(
        self,
        facility: FacilityDataService,
        interval: float = 300.0,
        run_on_start: bool = True,
    ):
        self._facility = facility
        self._interval = interval
        self._run_on_start = run_on_start
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        if not self._run_on_start and self._interval <= 0:
            logger.info("Aggregation scheduler disabled")
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self) -> None:
        if self._run_on_start:
            await self._run_once("startup")
        while self._interval > 0:
            await asyncio.sleep(self._interval)
            await self._run_once("scheduled")

    async def _run_once(self, reason: str) -> None:
        if self._facility.cycle_running:
            logger.info("Skipping %s aggregation, a cycle is already running", reason)
            return
        logger.info("Starting %s aggregation cycle", reason)
        try:
            await self._facility.run_cycle()
        except Exception:
            logger.exception("%s aggregation cycle failed", reason.capitalize())
