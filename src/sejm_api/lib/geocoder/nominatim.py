"""OpenStreetMap Nominatim postal-code geocoder.

Uses the Nominatim structured search
(https://nominatim.org/release-docs/develop/api/Search/) scoped to Poland.
Free but rate-limited to 1 req/sec; results are not cached.
"""

import asyncio

import httpx
from loguru import logger

from sejm_api.lib.geocoder.base import BaseGeocoder, GeocodedLocation, GeocodingProviderError
from sejm_api.lib.geocoder.postal import postal_code_candidates

NOMINATIM_API_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "InfoApp/1.0 (contact@example.com)"
DEFAULT_COUNTRY = "Poland"
# Nominatim usage policy: at most one request per second
DEFAULT_RATE_LIMIT_DELAY = 1.0

# Address keys tried in order for each administrative level
_COUNTY_KEYS = ("county", "state_district", "municipality")
_CITY_KEYS = ("city", "town", "village")
_ISO_KEYS = ("ISO3166-2-lvl4", "ISO3166_2_lvl4")


class NominatimGeocoder(BaseGeocoder):
    """OpenStreetMap Nominatim postal-code geocoder."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        country: str = DEFAULT_COUNTRY,
        base_url: str = NOMINATIM_API_URL,
        rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._country = country
        self._base_url = base_url
        self._rate_limit_delay = rate_limit_delay

    @property
    def provider_name(self) -> str:
        return "nominatim"

    @property
    def rate_limit_delay(self) -> float:
        return self._rate_limit_delay

    async def geocode_postal_code(self, postal_code: str) -> GeocodedLocation | None:
        """Geocode a postal code, trying the raw input and then ``NN-NNN``.

        Args:
            postal_code: Postal code as typed by the user.

        Returns:
            GeocodedLocation of the best match, or None when no variant matched.

        Raises:
            GeocodingProviderError: On timeout, connection failure, or when
                every variant was answered with an HTTP error.
        """
        candidates = postal_code_candidates(postal_code)
        if not candidates:
            return None

        headers = {"User-Agent": self._user_agent}
        status_errors: list[int] = []

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                for index, candidate in enumerate(candidates):
                    if index and self.rate_limit_delay:
                        await asyncio.sleep(self.rate_limit_delay)
                    params: dict[str, str | int] = {
                        "country": self._country,
                        "postalcode": candidate,
                        "format": "json",
                        "addressdetails": 1,
                        "limit": 1,
                    }
                    try:
                        response = await client.get(self._base_url, params=params, headers=headers)
                        response.raise_for_status()
                    except httpx.HTTPStatusError as e:
                        logger.warning(f"Nominatim HTTP error {e.response.status_code} for postal code variant")
                        status_errors.append(e.response.status_code)
                        continue

                    location = self._parse_response(response)
                    if location is not None:
                        return location

        except httpx.TimeoutException as e:
            logger.warning("Nominatim geocoder timeout")
            raise GeocodingProviderError("nominatim", "Geocoding request timed out") from e
        except httpx.RequestError as e:
            logger.warning(f"Nominatim geocoder connection error: {e}")
            raise GeocodingProviderError("nominatim", "Connection to geocoding provider failed") from e

        if len(status_errors) == len(candidates):
            raise GeocodingProviderError(
                "nominatim",
                f"Provider returned HTTP {status_errors[-1]}",
                status_code=status_errors[-1],
            )
        return None

    def _parse_response(self, response: httpx.Response) -> GeocodedLocation | None:
        """Parse a Nominatim search response into a GeocodedLocation.

        Malformed bodies are treated as no match.

        Args:
            response: Successful HTTP response from the search endpoint.

        Returns:
            GeocodedLocation or None if the body holds no usable result.
        """
        try:
            data = response.json()
        except ValueError:
            logger.warning("Nominatim returned a non-JSON body")
            return None

        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            return None

        best = data[0]
        address = best.get("address")
        if not isinstance(address, dict):
            address = {}

        location = GeocodedLocation(
            iso_code=_first_present(address, _ISO_KEYS) or _first_present(best, _ISO_KEYS),
            voivodeship=address.get("state") or None,
            county=_first_present(address, _COUNTY_KEYS),
            city=_first_present(address, _CITY_KEYS),
            raw_response={"results": data},
        )
        if location.is_empty:
            logger.warning("Nominatim result carries no administrative address details")
            return None
        return location


def _first_present(mapping: dict, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = mapping.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
