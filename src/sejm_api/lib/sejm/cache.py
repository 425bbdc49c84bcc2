"""Single-flight memoization and staleness tokens for shared async state."""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

from loguru import logger

from sejm_api.lib.sejm.base import Sitting
from sejm_api.lib.sejm.client import SejmClient

T = TypeVar("T")


class AsyncMemo(Generic[T]):
    """Caches the result of an async loader and shares one in-flight call.

    Concurrent callers await the same task. A failed load leaves the cache
    empty so the next caller retries. ``invalidate`` drops the cached value
    and detaches any in-flight load so its result is discarded.

    Args:
        loader: Zero-argument coroutine factory producing the value.
        name: Label used in log messages.
    """

    def __init__(self, loader: Callable[[], Awaitable[T]], name: str = "memo") -> None:
        self._loader = loader
        self._name = name
        self._value: T | None = None
        self._loaded = False
        self._task: asyncio.Task[T] | None = None
        self._epoch = 0

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def get(self) -> T:
        """Return the cached value, loading it once if needed."""
        if self._loaded:
            return self._value  # type: ignore[return-value]

        if self._task is None:
            self._task = asyncio.ensure_future(self._run(self._epoch))
        task = self._task
        return await asyncio.shield(task)

    def invalidate(self) -> None:
        """Forget the cached value; the next ``get`` reloads."""
        self._epoch += 1
        self._value = None
        self._loaded = False
        self._task = None
        logger.debug("Invalidated {} cache (epoch {})", self._name, self._epoch)

    async def _run(self, epoch: int) -> T:
        try:
            value = await self._loader()
        except BaseException:
            if epoch == self._epoch:
                self._task = None
            raise
        if epoch == self._epoch:
            self._value = value
            self._loaded = True
            self._task = None
        else:
            logger.debug("Discarding stale {} load from epoch {}", self._name, epoch)
        return value


class GenerationTracker:
    """Issues per-key generation tokens to detect superseded async work.

    A caller takes a token before starting work and checks it is still
    current before writing the result. ``invalidate`` makes every
    outstanding token for the key (or for all keys) stale.
    """

    def __init__(self) -> None:
        self._generations: dict[Hashable, int] = {}
        self._global = 0

    def issue(self, key: Hashable) -> tuple[int, int]:
        return (self._global, self._generations.get(key, 0))

    def is_current(self, key: Hashable, token: tuple[int, int]) -> bool:
        return token == (self._global, self._generations.get(key, 0))

    def invalidate(self, key: Hashable | None = None) -> None:
        if key is None:
            self._global += 1
        else:
            self._generations[key] = self._generations.get(key, 0) + 1


class ProceedingsCache(AsyncMemo[list[Sitting]]):
    """Session-wide memo of the chamber's sitting calendar."""

    def __init__(self, client: SejmClient) -> None:
        super().__init__(client.fetch_proceedings, name="proceedings")
