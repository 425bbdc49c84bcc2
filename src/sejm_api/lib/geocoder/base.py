"""Abstract postal-code geocoder interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GeocodedLocation:
    """Administrative location of a postal code.

    Every field is optional; ``None`` means "unknown", never "empty".
    """

    iso_code: str | None = None
    voivodeship: str | None = None
    county: str | None = None
    city: str | None = None
    raw_response: dict | None = None

    @property
    def is_empty(self) -> bool:
        return not any((self.iso_code, self.voivodeship, self.county, self.city))


class GeocodingProviderError(Exception):
    """Raised when a geocoding provider experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error)
    from a successful response with no match (which returns None).

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class BaseGeocoder(ABC):
    """Abstract postal-code geocoder. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @property
    def rate_limit_delay(self) -> float:
        """Minimum delay in seconds between requests (for rate-limited providers)."""
        return 0.0

    @abstractmethod
    async def geocode_postal_code(self, postal_code: str) -> GeocodedLocation | None:
        """Resolve a postal code to its administrative location.

        Args:
            postal_code: Postal code as typed by the user.

        Returns:
            GeocodedLocation or None if no provider result matched.

        Raises:
            GeocodingProviderError: On transport or service errors.
        """
