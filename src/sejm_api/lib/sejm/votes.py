"""Expanding-window aggregation of a representative's chamber votes.

Each representative starts with a 90-day window. Every "load more" widens it
by another step up to a ceiling; newly fetched votes are merged by
``(sitting_number, voting_number)`` and kept newest first.
"""

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from loguru import logger

from sejm_api.lib.sejm.base import SejmApiError, Sitting, VoteRecord
from sejm_api.lib.sejm.cache import GenerationTracker, ProceedingsCache
from sejm_api.lib.sejm.client import SejmClient

DEFAULT_INITIAL_WINDOW_DAYS = 90
DEFAULT_WINDOW_STEP_DAYS = 90
DEFAULT_MAX_WINDOW_DAYS = 400
DEFAULT_PAGE_SIZE = 12


def candidate_days(sittings: Iterable[Sitting], window_days: int, today: date) -> list[tuple[int, date]]:
    """Sitting days within ``[today - window_days, today]``.

    Returns:
        ``(sitting_number, day)`` pairs, newest sitting first and each
        sitting's days newest first.
    """
    start = today - timedelta(days=window_days)
    days: list[tuple[int, date]] = []
    for sitting in sorted(sittings, key=lambda s: s.number, reverse=True):
        for day in sorted(sitting.dates, reverse=True):
            if start <= day <= today:
                days.append((sitting.number, day))
    return days


def sort_votes(votes: Iterable[VoteRecord]) -> list[VoteRecord]:
    """Order by date descending, then voting number descending."""
    return sorted(votes, key=lambda v: (v.date, v.voting_number), reverse=True)


def merge_votes(existing: Iterable[VoteRecord], incoming: Iterable[VoteRecord]) -> list[VoteRecord]:
    """Union by identity key; existing records win over duplicates."""
    merged: dict[tuple[int, int], VoteRecord] = {}
    for vote in existing:
        merged.setdefault(vote.key, vote)
    for vote in incoming:
        merged.setdefault(vote.key, vote)
    return sort_votes(merged.values())


async def collect_votes(
    client: SejmClient,
    proceedings: ProceedingsCache,
    mp_id: int,
    window_days: int,
    today: date,
) -> list[VoteRecord]:
    """Fetch every vote of ``mp_id`` on sitting days inside the window.

    A failed day contributes nothing; the remaining days still count.

    Raises:
        SejmApiError: If the sitting calendar cannot be fetched.
    """
    days = candidate_days(await proceedings.get(), window_days, today)
    logger.debug("Collecting votes for MP {} over {} sitting days ({}d window)", mp_id, len(days), window_days)

    votes: list[VoteRecord] = []
    for sitting, day in days:
        try:
            votes.extend(await client.fetch_votes_for_day(mp_id, sitting, day))
        except SejmApiError as e:
            logger.warning(f"Skipping votes for MP {mp_id} on sitting {sitting} {day}: {e}")
    return votes


async def fetch_recent_votes(
    client: SejmClient,
    proceedings: ProceedingsCache,
    mp_id: int,
    window_days: int,
    today: date,
    already_have: set[tuple[int, int]] | frozenset[tuple[int, int]] = frozenset(),
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[VoteRecord]:
    """Newest votes in the window not yet known, at most ``page_size`` of them."""
    collected = sort_votes(await collect_votes(client, proceedings, mp_id, window_days, today))
    fresh: list[VoteRecord] = []
    seen: set[tuple[int, int]] = set(already_have)
    for vote in collected:
        if vote.key in seen:
            continue
        seen.add(vote.key)
        fresh.append(vote)
        if len(fresh) >= page_size:
            break
    return fresh


@dataclass
class AggregationState:
    """Per-representative vote history for the current session."""

    window_days: int
    votes: list[VoteRecord] = field(default_factory=list)
    loaded_once: bool = False
    loading: bool = False
    last_error: str | None = None

    @property
    def keys(self) -> set[tuple[int, int]]:
        return {vote.key for vote in self.votes}


class VotingAggregator:
    """Owns every representative's ``AggregationState``.

    Loads for one representative are serialized by a per-id lock; loads for
    different representatives run concurrently. ``reset`` makes any load
    already in flight discard its result.

    Args:
        client: Sejm API client.
        proceedings: Shared sitting-calendar cache.
        initial_window_days: Window used by the first load.
        window_step_days: Growth per ``load_more``.
        max_window_days: Window ceiling.
        page_size: Maximum new votes added per load.
        today: Clock returning the current date.
    """

    def __init__(
        self,
        client: SejmClient,
        proceedings: ProceedingsCache,
        initial_window_days: int = DEFAULT_INITIAL_WINDOW_DAYS,
        window_step_days: int = DEFAULT_WINDOW_STEP_DAYS,
        max_window_days: int = DEFAULT_MAX_WINDOW_DAYS,
        page_size: int = DEFAULT_PAGE_SIZE,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._client = client
        self._proceedings = proceedings
        self._initial_window = initial_window_days
        self._step = window_step_days
        self._max_window = max_window_days
        self._page_size = page_size
        self._today = today
        self._states: dict[int, AggregationState] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._generations = GenerationTracker()

    @property
    def max_window_days(self) -> int:
        return self._max_window

    def state(self, mp_id: int) -> AggregationState:
        """Current state for ``mp_id``, created empty on first access."""
        if mp_id not in self._states:
            self._states[mp_id] = AggregationState(window_days=self._initial_window)
        return self._states[mp_id]

    async def load_initial(self, mp_id: int) -> AggregationState:
        """Load the first page of votes unless it already loaded cleanly."""
        async with self._lock(mp_id):
            state = self.state(mp_id)
            if state.loaded_once and state.last_error is None:
                return state
            return await self._load(mp_id, state, state.window_days)

    async def load_more(self, mp_id: int) -> AggregationState:
        """Widen the window by one step and merge the next page of votes.

        At the ceiling this is a no-op. If the load fails the window is left
        where it was.
        """
        async with self._lock(mp_id):
            state = self.state(mp_id)
            if state.window_days >= self._max_window:
                logger.debug("MP {} already at the {}d window ceiling", mp_id, self._max_window)
                return state
            new_window = min(state.window_days + self._step, self._max_window)
            return await self._load(mp_id, state, new_window)

    def reset(self, mp_id: int | None = None) -> None:
        """Drop aggregated votes for one representative, or for everyone."""
        self._generations.invalidate(mp_id)
        if mp_id is None:
            self._states.clear()
        else:
            self._states.pop(mp_id, None)
        logger.info("Vote aggregation reset for {}", "all representatives" if mp_id is None else f"MP {mp_id}")

    async def _load(self, mp_id: int, state: AggregationState, window_days: int) -> AggregationState:
        token = self._generations.issue(mp_id)
        state.loading = True
        try:
            fresh = await fetch_recent_votes(
                self._client,
                self._proceedings,
                mp_id,
                window_days,
                self._today(),
                already_have=state.keys,
                page_size=self._page_size,
            )
        except SejmApiError as e:
            if self._generations.is_current(mp_id, token):
                state.loaded_once = True
                state.last_error = e.message
            raise
        finally:
            state.loading = False

        if not self._generations.is_current(mp_id, token):
            logger.info("Discarding stale vote load for MP {}", mp_id)
            return self.state(mp_id)

        state.votes = merge_votes(state.votes, fresh)
        state.window_days = window_days
        state.loaded_once = True
        state.last_error = None
        logger.info(
            "Loaded {} new votes for MP {} ({} total, {}d window)",
            len(fresh),
            mp_id,
            len(state.votes),
            window_days,
        )
        return state

    def _lock(self, mp_id: int) -> asyncio.Lock:
        if mp_id not in self._locks:
            self._locks[mp_id] = asyncio.Lock()
        return self._locks[mp_id]
