"""Data types for Sejm electoral districts and their lookup indexes."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

# Number of Sejm electoral districts fixed by the Electoral Code
DISTRICT_COUNT = 41


class DistrictScope(StrEnum):
    """How a district's territory is described in the official table."""

    ENUMERATED = "enumerated"
    WHOLE_VOIVODESHIP = "whole_voivodeship"


class DistrictDataError(Exception):
    """Raised when district source data violates a structural invariant.

    Args:
        message: Human-readable summary.
        problems: Individual violations found while validating.
    """

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        self.message = message
        self.problems = problems or []
        detail = f"{message}: {'; '.join(self.problems)}" if self.problems else message
        super().__init__(detail)


@dataclass(frozen=True)
class DistrictDescriptor:
    """One Sejm electoral district as described by the official table.

    ``counties`` hold full labels (``"powiat bolesławiecki"``); ``cities``
    hold bare city-with-county-rights names (``"Legnica"``).
    """

    district_number: int
    seat_city: str
    scope: DistrictScope
    voivodeship: str | None
    counties: tuple[str, ...] = ()
    cities: tuple[str, ...] = ()
    description: str = ""
    seats: int | None = None
    population: int | None = None
    voters: int | None = None

    @property
    def is_empty(self) -> bool:
        return not self.counties and not self.cities


@dataclass(frozen=True)
class LookupIndexes:
    """Read-only lookup tables keyed by ``normalize()`` output.

    Qualified indexes are keyed by ``(label_key, voivodeship_key)`` tuples.
    """

    county_only: Mapping[str, int]
    city_only: Mapping[str, int]
    county_voivodeship: Mapping[tuple[str, str], int]
    city_voivodeship: Mapping[tuple[str, str], int]
    voivodeship_only: Mapping[str, int]


@dataclass(frozen=True)
class DistrictSet:
    """Immutable district descriptors plus the indexes derived from them."""

    descriptors: Mapping[int, DistrictDescriptor]
    indexes: LookupIndexes
    source: str = field(default="packaged")

    def get(self, district_number: int) -> DistrictDescriptor | None:
        return self.descriptors.get(district_number)

    def __len__(self) -> int:
        return len(self.descriptors)
