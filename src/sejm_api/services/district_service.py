"""District service: postal code to Sejm district resolution.

Geocodes a postal code, trying the raw input and the canonical ``NN-NNN``
form, then runs the first geocoded location through the resolver.
"""

from dataclasses import dataclass

from loguru import logger

from sejm_api.lib.districts import DistrictDescriptor, DistrictMatch, DistrictResolver, DistrictSet
from sejm_api.lib.geocoder import BaseGeocoder, GeocodedLocation, postal_code_candidates


@dataclass(frozen=True)
class DistrictResolution:
    """Outcome of resolving a postal code."""

    postal_code: str
    match: DistrictMatch
    descriptor: DistrictDescriptor
    geocoded: GeocodedLocation

    @property
    def district_number(self) -> int:
        return self.match.district_number


async def geocode_postal_code(geocoder: BaseGeocoder, postal_code: str) -> GeocodedLocation | None:
    """Geocode a postal code in either ``NN-NNN`` or ``NNNNN`` form.

    Raises:
        ValueError: If the input is blank.
        GeocodingProviderError: On transport failure.
    """
    if not postal_code_candidates(postal_code):
        msg = "Postal code must not be empty"
        raise ValueError(msg)

    location = await geocoder.geocode_postal_code(postal_code)
    if location is None:
        logger.info("No geocoding result for postal code {!r}", postal_code)
    return location


async def resolve_district(
    geocoder: BaseGeocoder,
    resolver: DistrictResolver,
    postal_code: str,
) -> DistrictResolution | None:
    """Resolve a postal code to its Sejm district.

    Returns:
        DistrictResolution, or None when nothing matched (no geocoding
        result or every resolver tier missed).

    Raises:
        ValueError: If the input is blank.
        GeocodingProviderError: On transport failure.
    """
    location = await geocode_postal_code(geocoder, postal_code)
    if location is None:
        return None

    match = resolver.resolve_location(location)
    if match is None:
        return None

    descriptor = resolver.district_set.get(match.district_number)
    if descriptor is None:
        msg = f"Resolved district {match.district_number} missing from the district set"
        raise LookupError(msg)
    return DistrictResolution(postal_code=postal_code.strip(), match=match, descriptor=descriptor, geocoded=location)


def list_districts(district_set: DistrictSet) -> list[DistrictDescriptor]:
    """All districts in number order."""
    return sorted(district_set.descriptors.values(), key=lambda d: d.district_number)


def get_district(district_set: DistrictSet, district_number: int) -> DistrictDescriptor | None:
    return district_set.get(district_number)
