"""
Generation endpoint adapter.

Calls the Gemini ``generateContent`` REST endpoint with a single prompt
and returns a ``GenerationOutcome`` instead of raising.

Retry policy (transient failures only):
- Transient: HTTP 429/503 and request timeouts
- Delay before attempt n+1: backoff_base * 2**(n-1) (2s, 4s, 8s, ... by default)
- Ceiling: max_attempts total calls (default 5), then EXHAUSTED
- Permanent (any other status, transport error, empty answer): no retry
- Missing API key: CONFIGURATION, no network call at all

The backoff wait is an ``await`` on the injected sleep function, so a
cancelled request stops at the next wait and never starts another attempt.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol

import httpx

from amoura.config import TRANSIENT_STATUS_CODES, RetryPolicy, Settings, get_logger
from amoura.core.models import FailureReason, GenerationOutcome

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GenerationError(RuntimeError):
    """Base class for generation endpoint failures."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(GenerationError):
    """The endpoint credentials are missing or invalid."""


class TransientGenerationError(GenerationError):
    """The endpoint is busy or rate limited; worth retrying."""


class PermanentGenerationError(GenerationError):
    """The endpoint rejected the request; retrying will not help."""


def classify_status(status_code: int) -> type[GenerationError]:
    """Map a non-2xx HTTP status to the error class it represents."""
    if status_code in TRANSIENT_STATUS_CODES:
        return TransientGenerationError
    return PermanentGenerationError


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class GenerationClient(Protocol):
    """Anything that turns a prompt into a GenerationOutcome."""

    model: str

    async def generate(self, prompt: str) -> GenerationOutcome:
        ...


# ---------------------------------------------------------------------------
# Gemini Client
# ---------------------------------------------------------------------------


class GeminiClient:
    """
    Gemini REST client with bounded exponential backoff.

    Implements the GenerationClient protocol. One instance can serve many
    concurrent requests: it holds only immutable settings and the shared
    ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
        sleep: SleepFn = asyncio.sleep,
    ):
        """
        Initialize the client.

        Args:
            settings: Immutable settings (API key, model, retry policy, timeout).
            http_client: Shared async HTTP client. A short-lived one is
                opened per call when omitted.
            sleep: Awaitable used for backoff waits (injectable for tests).
        """
        self.settings = settings
        self.model = settings.gemini_model
        self.retry: RetryPolicy = settings.retry
        self._http = http_client
        self._sleep = sleep

    @property
    def endpoint(self) -> str:
        base = self.settings.gemini_base_url.rstrip("/")
        return f"{base}/models/{self.model}:generateContent"

    def _require_credentials(self) -> None:
        if not self.settings.has_credentials:
            raise ConfigurationError("GEMINI_API_KEY is not set")

    async def _post(self, http: httpx.AsyncClient, prompt: str) -> str:
        """
        Make exactly one call to the endpoint.

        Raises:
            TransientGenerationError: 429/503 or timeout.
            PermanentGenerationError: Any other failure.
        """
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = await http.post(
                self.endpoint,
                params={"key": self.settings.gemini_api_key},
                json=payload,
                timeout=self.settings.request_timeout,
            )
        except httpx.TimeoutException as exc:
            raise TransientGenerationError(f"Gemini request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise PermanentGenerationError(f"Gemini transport error: {exc}") from exc

        if response.status_code >= 300:
            error_cls = classify_status(response.status_code)
            raise error_cls(
                f"Gemini returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        return _extract_text(response)

    async def _attempt_loop(self, http: httpx.AsyncClient, prompt: str) -> GenerationOutcome:
        ceiling = self.retry.max_attempts
        for attempt in range(1, ceiling + 1):
            try:
                text = await self._post(http, prompt)
            except TransientGenerationError as exc:
                if attempt == ceiling:
                    logger.error(
                        "Generation still busy after %d attempts: %s", ceiling, exc
                    )
                    return GenerationOutcome.failed(
                        FailureReason.EXHAUSTED, attempt, exc.status_code
                    )
                delay = self.retry.delay_for(attempt)
                logger.warning(
                    "Generation busy (attempt %d/%d), backing off %.1fs: %s",
                    attempt,
                    ceiling,
                    delay,
                    exc,
                )
                await self._sleep(delay)
            except PermanentGenerationError as exc:
                logger.error("Generation failed permanently on attempt %d: %s", attempt, exc)
                return GenerationOutcome.failed(
                    FailureReason.PERMANENT, attempt, exc.status_code
                )
            else:
                if attempt > 1:
                    logger.info("Generation succeeded on attempt %d", attempt)
                return GenerationOutcome.success(text, attempt)

        # Unreachable: the loop returns on every path of the last attempt.
        raise AssertionError("retry loop exited without an outcome")

    async def generate(self, prompt: str) -> GenerationOutcome:
        """
        Generate an answer for a prompt.

        Args:
            prompt: The complete prompt built by ``build_chat_prompt``.

        Returns:
            GenerationOutcome with text, or a failure reason and attempt count.
        """
        try:
            self._require_credentials()
        except ConfigurationError as exc:
            logger.error("%s; skipping generation", exc)
            return GenerationOutcome.failed(FailureReason.CONFIGURATION, 0)

        if self._http is not None:
            return await self._attempt_loop(self._http, prompt)

        async with httpx.AsyncClient() as http:
            return await self._attempt_loop(http, prompt)


def _extract_text(response: httpx.Response) -> str:
    """Pull the first candidate's text out of a generateContent response."""
    try:
        data = response.json()
        parts = data["candidates"][0]["content"]["parts"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise PermanentGenerationError(
            "Gemini response has no candidate text", status_code=response.status_code
        ) from exc

    if not isinstance(parts, list):
        raise PermanentGenerationError(
            "Gemini response parts are not a list", status_code=response.status_code
        )

    text = "".join(
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
    if not text.strip():
        raise PermanentGenerationError(
            "Gemini response text is empty", status_code=response.status_code
        )
    return text


__all__ = [
    "GenerationClient",
    "GeminiClient",
    "GenerationError",
    "ConfigurationError",
    "TransientGenerationError",
    "PermanentGenerationError",
    "classify_status",
]
