"""
HTTP transport for the chat platform with rate-limit retry.

Every outbound call goes through DiscordHTTP.request, which runs an explicit
attempt loop over a fixed backoff table. Each attempt is classified into a
tagged AttemptResult:

- SUCCESS: 2xx (204 and non-JSON bodies yield an empty dict)
- RETRY: 429 while the backoff table still has an entry
- FATAL: any other non-2xx, raised immediately as DiscordAPIError

When the table runs out the call raises DiscordRateLimitError. With the
default table [1000, 2000, 4000] a call makes at most 4 attempts and waits
at most 7 seconds.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from forumsync.core.errors import DiscordAPIError, DiscordRateLimitError

logger = logging.getLogger(__name__)

DEFAULT_BACKOFF_MS: tuple[int, ...] = (1000, 2000, 4000)
USER_AGENT = "DiscordBot (https://github.com/forumsync/forumsync, 0.3.0)"


class AttemptOutcome(str, Enum):
    """Classification of a single HTTP attempt."""

    SUCCESS = "success"
    RETRY = "retry"
    FATAL = "fatal"


@dataclass(frozen=True)
class AttemptResult:
    """Tagged result of one attempt."""

    outcome: AttemptOutcome
    status_code: int
    body: Any


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def classify_response(response: httpx.Response, retries_left: bool) -> AttemptResult:
    """
    Classify a response into an AttemptResult.

    Args:
        response: The HTTP response
        retries_left: Whether the backoff table has another delay

    Returns:
        Tagged attempt result
    """
    status = response.status_code
    if status == 429 and retries_left:
        return AttemptResult(AttemptOutcome.RETRY, status, None)
    if status == 204:
        return AttemptResult(AttemptOutcome.SUCCESS, status, {})
    if response.is_success:
        body = _parse_body(response)
        return AttemptResult(AttemptOutcome.SUCCESS, status, body if isinstance(body, dict) else {})
    return AttemptResult(AttemptOutcome.FATAL, status, _parse_body(response))


class DiscordHTTP:
    """
    Authenticated JSON client for the chat platform REST API.

    Example:
        >>> http = DiscordHTTP(token="...")
        >>> body = await http.request("GET", "/channels/123")
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://discord.com/api/v10",
        backoff_ms: Sequence[int] = DEFAULT_BACKOFF_MS,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.backoff_ms = tuple(backoff_ms)
        self._token = token
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self._sleep = sleep

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bot {self._token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Send a request, retrying on 429 per the backoff table.

        Args:
            method: HTTP method
            path: Path relative to base_url (e.g. "/channels/123/messages")
            json: Optional JSON body

        Returns:
            Parsed JSON object body, or {} for 204/non-object bodies

        Raises:
            DiscordRateLimitError: If every attempt was rate limited
            DiscordAPIError: On any other non-2xx response
            httpx.RequestError: On transport failures (not retried)
        """
        url = f"{self.base_url}{path}"
        attempt = 0

        while True:
            response = await self._client.request(method, url, json=json, headers=self.headers)
            result = classify_response(response, retries_left=attempt < len(self.backoff_ms))

            if result.outcome is AttemptOutcome.SUCCESS:
                return result.body

            if result.outcome is AttemptOutcome.RETRY:
                delay_ms = self.backoff_ms[attempt]
                attempt += 1
                logger.info(
                    "%s %s rate limited, retry %d/%d in %dms",
                    method,
                    path,
                    attempt,
                    len(self.backoff_ms),
                    delay_ms,
                )
                await self._sleep(delay_ms / 1000)
                continue

            if result.status_code == 429:
                logger.warning("%s %s still rate limited after %d attempts", method, path, attempt + 1)
                raise DiscordRateLimitError(result.body, attempts=attempt + 1)
            raise DiscordAPIError(result.status_code, result.body)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
