"""Representative service: roster queries and voting-record aggregation.

A ``SejmSession`` owns every piece of process-wide Sejm state (HTTP client,
roster cache, sitting calendar and vote aggregator) so tests and the CLI can
build isolated instances.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from loguru import logger

from sejm_api.lib.sejm import (
    AggregationState,
    ProceedingsCache,
    Representative,
    RosterStore,
    SejmClient,
    VotingAggregator,
    filter_roster,
)

if TYPE_CHECKING:
    from sejm_api.core.config import Settings
    from sejm_api.lib.districts import DistrictResolver
    from sejm_api.lib.geocoder import BaseGeocoder


@dataclass
class SejmSession:
    """Sejm client plus the caches and aggregator layered on top of it."""

    client: SejmClient
    roster: RosterStore
    proceedings: ProceedingsCache
    aggregator: VotingAggregator

    async def close(self) -> None:
        await self.client.close()


def create_session(
    settings: Settings,
    client: SejmClient | None = None,
    today: Callable[[], date] = date.today,
) -> SejmSession:
    """Build a session from settings.

    Args:
        settings: Application settings.
        client: Optional pre-built client (tests inject one with a mock transport).
        today: Clock used by the vote aggregator.
    """
    if client is None:
        client = SejmClient(
            base_url=settings.sejm_api_base_url,
            term=settings.sejm_term,
            timeout=settings.sejm_request_timeout,
            web_base_url=settings.sejm_web_base_url,
        )
    proceedings = ProceedingsCache(client)
    aggregator = VotingAggregator(
        client,
        proceedings,
        initial_window_days=settings.votes_initial_window_days,
        window_step_days=settings.votes_window_step_days,
        max_window_days=settings.votes_max_window_days,
        page_size=settings.votes_page_size,
        today=today,
    )
    return SejmSession(client=client, roster=RosterStore(client), proceedings=proceedings, aggregator=aggregator)


async def list_representatives(
    session: SejmSession,
    district: int | None = None,
    name: str | None = None,
    postal_code: str | None = None,
    geocoder: BaseGeocoder | None = None,
    resolver: DistrictResolver | None = None,
) -> tuple[list[Representative], int | None]:
    """Filter the roster by district, name and/or postal code.

    A postal code is resolved to a district first; an explicit ``district``
    takes precedence over it.

    Returns:
        Tuple of (matching representatives, district number used or None).

    Raises:
        ValueError: If a postal code is given without geocoder/resolver.
        LookupError: If the postal code resolves to no district.
        GeocodingProviderError: If postal-code geocoding fails in transport.
        SejmApiError: If the roster cannot be fetched.
    """
    if district is None and postal_code:
        if geocoder is None or resolver is None:
            msg = "Postal-code filtering needs a geocoder and a resolver"
            raise ValueError(msg)
        from sejm_api.services.district_service import resolve_district

        resolution = await resolve_district(geocoder, resolver, postal_code)
        if resolution is None:
            msg = f"Could not determine the electoral district for postal code {postal_code!r}"
            raise LookupError(msg)
        district = resolution.district_number

    roster = await session.roster.get()
    matches = filter_roster(roster, district_number=district, name_query=name)
    logger.debug("Roster filter district={} name={!r}: {} of {}", district, name, len(matches), len(roster))
    return matches, district


async def get_representative(session: SejmSession, mp_id: int) -> Representative | None:
    return await session.roster.find(mp_id)


async def _require_representative(session: SejmSession, mp_id: int) -> Representative:
    rep = await session.roster.find(mp_id)
    if rep is None:
        msg = f"Representative {mp_id} not found"
        raise LookupError(msg)
    return rep


async def get_votes(session: SejmSession, mp_id: int) -> AggregationState:
    """First page of a representative's votes (loaded once per session).

    Raises:
        LookupError: If ``mp_id`` is not in the roster.
        SejmApiError: If the roster or the sitting calendar cannot be fetched.
    """
    await _require_representative(session, mp_id)
    return await session.aggregator.load_initial(mp_id)


async def load_more_votes(session: SejmSession, mp_id: int, steps: int = 1) -> AggregationState:
    """Widen the vote window ``steps`` times, loading the first page if needed.

    Raises:
        LookupError: If ``mp_id`` is not in the roster.
    """
    await _require_representative(session, mp_id)
    state = await session.aggregator.load_initial(mp_id)
    for _ in range(steps):
        if state.window_days >= session.aggregator.max_window_days:
            break
        state = await session.aggregator.load_more(mp_id)
    return state


async def refresh(session: SejmSession) -> list[Representative]:
    """Drop all cached Sejm data and refetch the roster."""
    session.proceedings.invalidate()
    session.aggregator.reset()
    roster = await session.roster.refresh()
    logger.info("Sejm data refreshed: {} representatives", len(roster))
    return roster
