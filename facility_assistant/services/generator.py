import asyncio
import logging

from anthropic import AsyncAnthropic

logger = logging.getLogger(__name__)

MODEL = "claude-sonnet-4-20250514"


class ResponseGenerator:
    """Thin wrapper around the Anthropic Messages API.

    ``generate`` never raises: API errors, timeouts and empty completions are
    logged and reported as ``None`` so callers can fall back.
    """

    def __init__(self, api_key: str, model: str = MODEL, timeout: float = 12.0):
        self._client = AsyncAnthropic(api_key=api_key) if api_key else None
        self._model = model
        self._timeout = timeout

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def generate(
        self, user_prompt: str, system_prompt: str | None = None, max_tokens: int = 1024
    ) -> str | None:
        if self._client is None:
            logger.warning("No Anthropic API key configured, skipping generation")
            return None

        kwargs = {
            "model": self._model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = await asyncio.wait_for(
                self._client.messages.create(**kwargs), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Anthropic call timed out after %.1fs", self._timeout)
            return None
        except Exception:
            logger.exception("Anthropic API call failed")
            return None

        text = self._extract_text(response)
        if not text:
            logger.warning("Empty response from Anthropic")
            return None
        return text

    @staticmethod
    def _extract_text(response) -> str:
        parts = [
            getattr(block, "text", "") or ""
            for block in (getattr(response, "content", None) or [])
        ]
        return "".join(parts).strip()
