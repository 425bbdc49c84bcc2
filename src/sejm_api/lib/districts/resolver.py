"""Cascading resolution of a geocoded location to a Sejm district.

Tiers are probed in strict order and the first hit wins:

    a. city + voivodeship
    b. county + voivodeship
    c. city alone
    d. county alone
    e. whole voivodeship

Qualified pairs are unambiguous; bare names cover geocoder results that omit
the region; the whole-voivodeship tier is the coarsest and must never mask a
more specific match.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from loguru import logger

from sejm_api.lib.districts.aliases import (
    CountyLabelRepair,
    canonicalize_voivodeship,
    county_key,
    fix_county_label,
    voivodeship_from_iso,
)
from sejm_api.lib.districts.base import DistrictSet
from sejm_api.lib.districts.text import normalize
from sejm_api.lib.geocoder.base import GeocodedLocation


class MatchTier(StrEnum):
    """Lookup tier that produced a district match, most specific first."""

    CITY_VOIVODESHIP = "city_voivodeship"
    COUNTY_VOIVODESHIP = "county_voivodeship"
    CITY = "city"
    COUNTY = "county"
    VOIVODESHIP = "voivodeship"


@dataclass(frozen=True)
class NormalizedLocation:
    """Geocoded location after alias resolution and county repair."""

    voivodeship: str | None
    county: str | None
    city: str | None


@dataclass(frozen=True)
class DistrictMatch:
    """A resolved district and how it was found."""

    district_number: int
    tier: MatchTier
    location: NormalizedLocation


def normalize_location(
    location: GeocodedLocation,
    county_repair: CountyLabelRepair = fix_county_label,
) -> NormalizedLocation:
    """Canonicalize the voivodeship and repair the county label.

    The ISO subdivision code is authoritative; the free-text region is only
    used when the code is absent or unknown.
    """
    voivodeship = voivodeship_from_iso(location.iso_code) or canonicalize_voivodeship(location.voivodeship)
    return NormalizedLocation(
        voivodeship=voivodeship,
        county=county_repair(location.county),
        city=location.city or None,
    )


class DistrictResolver:
    """Resolves geocoded locations against a loaded ``DistrictSet``.

    Args:
        district_set: Parsed and indexed district data.
        county_repair: County-label repair stage; replaceable by an
            authoritative administrative-boundary lookup.
    """

    def __init__(self, district_set: DistrictSet, county_repair: CountyLabelRepair = fix_county_label) -> None:
        self._districts = district_set
        self._county_repair = county_repair

    @property
    def district_set(self) -> DistrictSet:
        return self._districts

    def resolve_location(self, location: GeocodedLocation) -> DistrictMatch | None:
        """Map a geocoded location to a district number.

        Args:
            location: Raw geocoder output.

        Returns:
            DistrictMatch for the first tier that hits, or None.
        """
        normalized = normalize_location(location, self._county_repair)
        logger.debug(
            "Resolving location voivodeship={!r} county={!r} city={!r}",
            normalized.voivodeship,
            normalized.county,
            normalized.city,
        )

        for tier, index, key in self._probes(normalized):
            district = index.get(key)
            if district is not None:
                logger.info("District match: tier={} key={!r} -> {}", tier.value, key, district)
                return DistrictMatch(district_number=district, tier=tier, location=normalized)

        logger.info("No district match for {!r}", normalized)
        return None

    def _probes(self, location: NormalizedLocation) -> Iterator[tuple[MatchTier, Mapping[Any, int], Any]]:
        """Yield (tier, index, key) in resolution order, skipping tiers with absent fields."""
        indexes = self._districts.indexes
        voivodeship = normalize(location.voivodeship) if location.voivodeship else None
        county = county_key(location.county) if location.county else None
        city = normalize(location.city) if location.city else None

        if city and voivodeship:
            yield MatchTier.CITY_VOIVODESHIP, indexes.city_voivodeship, (city, voivodeship)
        if county and voivodeship:
            yield MatchTier.COUNTY_VOIVODESHIP, indexes.county_voivodeship, (county, voivodeship)
        if city:
            yield MatchTier.CITY, indexes.city_only, city
        if county:
            yield MatchTier.COUNTY, indexes.county_only, county
        if voivodeship:
            yield MatchTier.VOIVODESHIP, indexes.voivodeship_only, voivodeship
