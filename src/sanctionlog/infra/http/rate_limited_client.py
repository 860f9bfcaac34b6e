import asyncio
import time

import httpx


class RateLimitedClient:
    """Async HTTP client with interval-based rate limiting and a cap on in-flight requests."""

    def __init__(
        self,
        rate_per_second: float = 5.0,
        timeout: float = 30.0,
        max_in_flight: int = 4,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be positive")
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")
        self._min_interval = 1.0 / rate_per_second
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._in_flight = asyncio.Semaphore(max_in_flight)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def post(self, url: str, json: dict | list | None = None) -> httpx.Response:
        async with self._in_flight:
            await self._wait_for_slot()
            return await self._client.post(url, json=json)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
