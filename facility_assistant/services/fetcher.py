import asyncio
import logging

import httpx

from facility_assistant.exceptions.custom import FetchError

logger = logging.getLogger(__name__)

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class SourceFetcher:
    """Fetch raw page content with bounded retries and linear backoff.

    Attempt ``i`` (1-based) that fails is followed by a ``i * base_delay``
    pause, except after the last attempt.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_retries: int = 3,
        base_delay: float = 1.0,
        timeout: float = 10.0,
    ):
        self._client = client
        self._max_retries = max(1, max_retries)
        self._base_delay = base_delay
        self._timeout = timeout

    async def fetch(self, url: str) -> str:
        last_error = "no attempt made"
        last_status: int | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                resp = await self._client.get(
                    url,
                    follow_redirects=True,
                    timeout=self._timeout,
                    headers={"User-Agent": _USER_AGENT},
                )
                if resp.is_success:
                    return resp.text
                last_status = resp.status_code
                last_error = f"HTTP {resp.status_code}"
            except httpx.HTTPError as exc:
                last_status = None
                last_error = f"{type(exc).__name__}: {exc}"

            logger.info(
                "Attempt %d/%d failed for %s: %s",
                attempt, self._max_retries, url, last_error,
            )
            if attempt < self._max_retries:
                await asyncio.sleep(self._base_delay * attempt)

        raise FetchError(
            f"Failed to fetch {url} after {self._max_retries} attempts: {last_error}",
            status_code=last_status,
            attempts=self._max_retries,
        )
