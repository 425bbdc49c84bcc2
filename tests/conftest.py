"""Shared test fixtures: settings, district data, and Sejm stubs."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from sejm_api.core.config import Settings
from sejm_api.lib.districts import DistrictResolver, DistrictSet, load_district_set
from sejm_api.lib.sejm import Representative, Sitting, VoteChoice, VoteRecord

TODAY = date(2025, 6, 30)


@pytest.fixture
def settings() -> Settings:
    """Test application settings (no .env file)."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture(scope="session")
def district_set() -> DistrictSet:
    """The packaged, validated district set."""
    return load_district_set()


@pytest.fixture
def resolver(district_set: DistrictSet) -> DistrictResolver:
    return DistrictResolver(district_set)


@pytest.fixture
def representatives() -> list[Representative]:
    """A small roster in source (unsorted) order."""
    return [
        Representative(id=3, first_name="Anna", last_name="Żak", club="KO", district_number=19),
        Representative(id=1, first_name="Jan", last_name="Kowalski", club="PiS", district_number=19),
        Representative(id=2, first_name="Łukasz", last_name="Łęcki", club="PSL", district_number=8),
        Representative(id=4, first_name="Adam", last_name="Kowalski", district_number=24),
    ]


@pytest.fixture
def sittings() -> list[Sitting]:
    """Sitting calendar around ``TODAY`` (2025-06-30)."""
    return [
        Sitting(number=30, dates=(date(2025, 3, 4), date(2025, 3, 5))),
        Sitting(number=35, dates=(date(2025, 6, 24), date(2025, 6, 25), date(2025, 6, 26))),
        Sitting(number=33, dates=(date(2025, 5, 6),)),
        Sitting(number=20, dates=(date(2024, 10, 1),)),
        Sitting(number=10, dates=(date(2024, 5, 20),)),
    ]


def make_vote(
    sitting: int,
    voting: int,
    day: date,
    vote: VoteChoice = VoteChoice.YES,
    topic: str = "Głosowanie",
) -> VoteRecord:
    return VoteRecord(topic=topic, vote=vote, date=day, sitting_number=sitting, voting_number=voting)


@pytest.fixture
def sejm_client(sittings: list[Sitting]) -> MagicMock:
    """Stub SejmClient: each sitting day yields two votings numbered from the day."""

    async def votes_for_day(mp_id: int, sitting: int, day: date) -> list[VoteRecord]:
        base = day.day * 10
        return [make_vote(sitting, base + 1, day), make_vote(sitting, base + 2, day, VoteChoice.NO)]

    client = MagicMock()
    client.fetch_proceedings = AsyncMock(return_value=sittings)
    client.fetch_votes_for_day = AsyncMock(side_effect=votes_for_day)
    client.fetch_mps = AsyncMock()
    client.close = AsyncMock()
    return client
