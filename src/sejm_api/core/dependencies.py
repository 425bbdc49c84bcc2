"""FastAPI dependency injection for district data, geocoding and the Sejm session.

The Sejm session is a process-wide singleton created on first use and
closed by the application lifespan.
"""

from typing import Annotated

from fastapi import Depends

from sejm_api.core.config import Settings, get_settings
from sejm_api.lib.districts import DistrictResolver, DistrictSet, load_district_set
from sejm_api.lib.geocoder import BaseGeocoder, geocoder_from_settings
from sejm_api.services.representative_service import SejmSession, create_session

_session: SejmSession | None = None


def get_district_set(settings: Annotated[Settings, Depends(get_settings)]) -> DistrictSet:
    """Return the validated district set (built once per table path)."""
    return load_district_set(settings.district_table_path)


def get_resolver(district_set: Annotated[DistrictSet, Depends(get_district_set)]) -> DistrictResolver:
    return DistrictResolver(district_set)


def get_geocoder(settings: Annotated[Settings, Depends(get_settings)]) -> BaseGeocoder:
    return geocoder_from_settings(settings)


async def get_sejm_session(settings: Annotated[Settings, Depends(get_settings)]) -> SejmSession:
    """Return the shared Sejm session, creating it on first use.

    Runs on the event loop so concurrent first requests share one session.
    """
    global _session
    if _session is None:
        _session = create_session(settings)
    return _session


async def close_sejm_session() -> None:
    """Close and forget the shared Sejm session."""
    global _session
    if _session is not None:
        await _session.close()
        _session = None
