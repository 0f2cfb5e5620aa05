"""Cache provider contract and miss coalescing.

Every cache backend exposes the same small surface so the tenant
resolver can be composed with either of them at startup.
"""

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, Protocol, TypeVar


T = TypeVar("T")

Producer = Callable[[], Awaitable[T]]


class CacheProvider(Protocol):
    """Key/value cache with TTL and read-through support."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> bool: ...

    async def remember(self, key: str, ttl_seconds: int, producer: Producer[T]) -> T:
        """Return the cached value for key, or produce, store and return it.

        A producer result of None is returned but not stored.
        """
        ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...


class SingleFlight:
    """Coalesce concurrent calls for the same key into one call.

    The first caller for a key starts the call as a task; every caller,
    the first included, awaits that task through ``asyncio.shield`` and
    receives its result or its exception. Cancelling a caller never
    cancels the shared call, so the remaining callers still get its
    outcome.

    Example:
        flights = SingleFlight()
        org = await flights.do("tenant:slug:acme", lambda: load("acme"))
    """

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Future[Any]] = {}

    def __len__(self) -> int:
        return len(self._inflight)

    async def do(self, key: str, call: Producer[T]) -> T:
        task = self._inflight.get(key)
        if task is None or task.done():
            task = asyncio.ensure_future(call())
            self._inflight[key] = task
            task.add_done_callback(partial(self._forget, key))
        result: T = await asyncio.shield(task)
        return result

    def _forget(self, key: str, task: "asyncio.Future[Any]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the exception retrieved; with every caller gone asyncio would warn
        if not task.cancelled():
            task.exception()
