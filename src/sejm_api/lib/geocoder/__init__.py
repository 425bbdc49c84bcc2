"""Geocoder library: postal-code to administrative-region lookup.

Public API:
    - BaseGeocoder: Abstract provider interface
    - GeocodedLocation: Result dataclass
    - GeocodingProviderError: Provider transport/service error
    - NominatimGeocoder: OpenStreetMap Nominatim provider
    - normalize_postal_code / postal_code_candidates: Postal-code helpers
    - get_geocoder: Provider factory/registry
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sejm_api.lib.geocoder.base import BaseGeocoder, GeocodedLocation, GeocodingProviderError
from sejm_api.lib.geocoder.nominatim import NominatimGeocoder
from sejm_api.lib.geocoder.postal import is_valid_postal_code, normalize_postal_code, postal_code_candidates

if TYPE_CHECKING:
    from sejm_api.core.config import Settings

_PROVIDERS: dict[str, type[BaseGeocoder]] = {
    "nominatim": NominatimGeocoder,
}


def get_geocoder(provider: str = "nominatim", **kwargs: Any) -> BaseGeocoder:
    """Get a geocoder instance by provider name.

    Args:
        provider: Provider name (e.g., "nominatim").
        **kwargs: Additional arguments forwarded to the provider constructor.

    Returns:
        An instance of the requested geocoder provider.

    Raises:
        ValueError: If the provider is not registered.
    """
    cls = _PROVIDERS.get(provider)
    if cls is None:
        msg = f"Unknown geocoder provider: {provider!r}. Available: {list(_PROVIDERS.keys())}"
        raise ValueError(msg)
    return cls(**kwargs)


def geocoder_from_settings(settings: Settings) -> BaseGeocoder:
    """Build the configured Nominatim geocoder."""
    return get_geocoder(
        "nominatim",
        timeout=settings.geocoder_timeout,
        user_agent=settings.geocoder_user_agent,
        country=settings.geocoder_country,
        base_url=settings.geocoder_nominatim_url,
    )


__all__ = [
    "BaseGeocoder",
    "GeocodedLocation",
    "GeocodingProviderError",
    "NominatimGeocoder",
    "geocoder_from_settings",
    "get_geocoder",
    "is_valid_postal_code",
    "normalize_postal_code",
    "postal_code_candidates",
]
