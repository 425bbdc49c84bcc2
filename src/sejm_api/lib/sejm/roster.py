"""Representative roster: ordering, filtering and cached retrieval."""

from collections.abc import Iterable

from loguru import logger

from sejm_api.lib.districts.text import collation_key, normalize
from sejm_api.lib.sejm.base import Representative
from sejm_api.lib.sejm.cache import AsyncMemo
from sejm_api.lib.sejm.client import SejmClient


def sort_roster(representatives: Iterable[Representative]) -> list[Representative]:
    """Order by last name, then first name, ignoring case and diacritics."""
    return sorted(
        representatives,
        key=lambda rep: (collation_key(rep.last_name), collation_key(rep.first_name), rep.id),
    )


def matches_name(representative: Representative, query: str) -> bool:
    """True when ``query`` is a substring of the representative's name.

    Either name order matches, so "Kowalski Jan" and "jan kowal" both hit.
    """
    needle = normalize(query)
    if not needle:
        return True
    first = normalize(representative.first_name)
    last = normalize(representative.last_name)
    haystacks = (first, last, f"{first} {last}", f"{last} {first}")
    return any(needle in haystack for haystack in haystacks)


def filter_roster(
    representatives: Iterable[Representative],
    district_number: int | None = None,
    name_query: str | None = None,
) -> list[Representative]:
    """Filter by district and/or a name substring, keeping roster order."""
    result = []
    for rep in representatives:
        if district_number is not None and rep.district_number != district_number:
            continue
        if name_query and not matches_name(rep, name_query):
            continue
        result.append(rep)
    return result


class RosterStore:
    """Process-wide roster cache backed by a single-flight loader.

    Args:
        client: Sejm API client used to fetch the roster.
    """

    def __init__(self, client: SejmClient) -> None:
        self._client = client
        self._memo: AsyncMemo[list[Representative]] = AsyncMemo(self._load, name="roster")

    async def _load(self) -> list[Representative]:
        roster = sort_roster(await self._client.fetch_mps())
        logger.info("Roster loaded: {} representatives", len(roster))
        return roster

    async def get(self) -> list[Representative]:
        """Return the sorted roster, fetching it on first use."""
        return await self._memo.get()

    async def refresh(self) -> list[Representative]:
        """Drop the cached roster and fetch it again."""
        self._memo.invalidate()
        return await self._memo.get()

    def invalidate(self) -> None:
        self._memo.invalidate()

    async def find(self, mp_id: int) -> Representative | None:
        for rep in await self.get():
            if rep.id == mp_id:
                return rep
        return None
