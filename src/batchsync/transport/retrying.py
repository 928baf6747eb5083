"""Step-aware retries for batch protocol exchanges.

A ``get-more-changes`` exchange is a read and is replayed on any transient
failure. A ``send-changes`` exchange may already have been applied by the
server when its reply is lost, so it is replayed only when the server
provably did not process it: the connection was never established, or the
server answered 429. A request carrying ``batchsync-idempotent: true`` is
replayed like a read.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx

from batchsync.transport.headers import BATCH_INDEX_HEADER, IDEMPOTENT_HEADER, STEP_HEADER, STEP_SEND_CHANGES

_LOG = logging.getLogger(__name__)

_RATE_LIMITED = 429
_GATEWAY_STATUS_CODES = frozenset({502, 503, 504})
# Raised before any request bytes reach the server.
_UNSENT_ERRORS: tuple[type[httpx.TransportError], ...] = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.PoolTimeout,
)


def backoff_delay(attempt: int, *, base: float = 1.0, cap: float = 4.0) -> float:
    """Exponential delay for retry *attempt* (0-based), capped, plus jitter."""
    return min(cap, base * 2**attempt) + random.uniform(0.0, 0.25)


def parse_retry_after(value: str | None, *, now: datetime | None = None) -> float:
    """Seconds to wait from a ``Retry-After`` value, in delta or HTTP-date form.

    Missing or unparseable values mean no extra wait.
    """
    if value is None:
        return 0.0
    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return 0.0
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    current = now or datetime.now(timezone.utc)
    return max(0.0, (when - current).total_seconds())


def is_replayable(request: httpx.Request) -> bool:
    if request.headers.get(STEP_HEADER) != STEP_SEND_CHANGES:
        return True
    return request.headers.get(IDEMPOTENT_HEADER, "").lower() == "true"


class _RateLimitGate:
    """Holds every exchange sharing one transport while a 429 pause runs."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._open = asyncio.Event()
        self._open.set()
        self.paused_until = 0.0

    @property
    def is_open(self) -> bool:
        return self._open.is_set()

    async def wait(self) -> None:
        await self._open.wait()

    async def pause(self, seconds: float) -> None:
        async with self._lock:
            until = time.monotonic() + max(0.0, seconds)
            if until <= self.paused_until:
                return
            self.paused_until = until
            self._open.clear()

        await asyncio.sleep(max(0.0, self.paused_until - time.monotonic()))

        async with self._lock:
            if time.monotonic() >= self.paused_until:
                self._open.set()


class RetryingTransport(httpx.AsyncBaseTransport):
    """httpx transport that replays transient batch exchange failures.

    At most *max_retries* replays follow the first attempt. When they run
    out, the last response is returned or the last transport error raised.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        backoff_cap: float = 4.0,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries
        self._backoff_base = backoff_base
        self._backoff_cap = backoff_cap
        self._gate = _RateLimitGate()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        replayable = is_replayable(request)
        attempt = 0
        while True:
            await self._gate.wait()
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError as exc:
                if attempt >= self._max_retries or not (replayable or isinstance(exc, _UNSENT_ERRORS)):
                    raise
                await self._backoff(request, attempt, type(exc).__name__)
                attempt += 1
                continue

            status = response.status_code
            if status == _RATE_LIMITED:
                await self._gate.pause(parse_retry_after(response.headers.get("Retry-After")))
            elif not (replayable and status in _GATEWAY_STATUS_CODES):
                return response
            if attempt >= self._max_retries:
                return response

            if status != _RATE_LIMITED:
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                if retry_after > 0:
                    await asyncio.sleep(retry_after)
            await self._backoff(request, attempt, f"HTTP {status}")
            attempt += 1

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def _backoff(self, request: httpx.Request, attempt: int, reason: str) -> None:
        delay = backoff_delay(attempt, base=self._backoff_base, cap=self._backoff_cap)
        _LOG.warning(
            "Retrying %s for batch %s after %s (retry %d of %d, in %.2fs)",
            request.headers.get(STEP_HEADER, "request"),
            request.headers.get(BATCH_INDEX_HEADER, "?"),
            reason,
            attempt + 1,
            self._max_retries,
            delay,
        )
        await asyncio.sleep(delay)
