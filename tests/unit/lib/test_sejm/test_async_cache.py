"""Unit tests for single-flight memoization and generation tokens."""

import asyncio

import pytest

from sejm_api.lib.sejm.cache import AsyncMemo, GenerationTracker


class TestAsyncMemo:
    """Tests for AsyncMemo."""

    async def test_concurrent_callers_share_one_load(self) -> None:
        calls = 0
        release = asyncio.Event()

        async def loader() -> list[int]:
            nonlocal calls
            calls += 1
            await release.wait()
            return [1, 2, 3]

        memo: AsyncMemo[list[int]] = AsyncMemo(loader)
        waiters = [asyncio.create_task(memo.get()) for _ in range(5)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*waiters)

        assert calls == 1
        assert all(r == [1, 2, 3] for r in results)
        assert memo.loaded

    async def test_failure_leaves_cache_empty(self) -> None:
        attempts = 0

        async def loader() -> str:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise RuntimeError("boom")
            return "ok"

        memo: AsyncMemo[str] = AsyncMemo(loader)
        with pytest.raises(RuntimeError):
            await memo.get()
        assert not memo.loaded
        assert await memo.get() == "ok"
        assert attempts == 2

    async def test_invalidate_forces_reload(self) -> None:
        values = iter(["first", "second"])

        async def loader() -> str:
            return next(values)

        memo: AsyncMemo[str] = AsyncMemo(loader)
        assert await memo.get() == "first"
        assert await memo.get() == "first"
        memo.invalidate()
        assert await memo.get() == "second"

    async def test_invalidate_during_load_discards_result(self) -> None:
        release = asyncio.Event()
        values = iter(["stale", "fresh"])

        async def loader() -> str:
            value = next(values)
            if value == "stale":
                await release.wait()
            return value

        memo: AsyncMemo[str] = AsyncMemo(loader)
        in_flight = asyncio.create_task(memo.get())
        await asyncio.sleep(0)
        memo.invalidate()
        release.set()

        assert await in_flight == "stale"
        assert not memo.loaded
        assert await memo.get() == "fresh"


class TestGenerationTracker:
    """Tests for GenerationTracker."""

    def test_token_current_until_invalidated(self) -> None:
        tracker = GenerationTracker()
        token = tracker.issue(1)
        assert tracker.is_current(1, token)
        tracker.invalidate(1)
        assert not tracker.is_current(1, token)

    def test_invalidation_is_per_key(self) -> None:
        tracker = GenerationTracker()
        token = tracker.issue(2)
        tracker.invalidate(1)
        assert tracker.is_current(2, token)

    def test_global_invalidation(self) -> None:
        tracker = GenerationTracker()
        tokens = {key: tracker.issue(key) for key in (1, 2)}
        tracker.invalidate()
        assert not any(tracker.is_current(key, token) for key, token in tokens.items())
