"""Tests for FastAPI dependency injection module."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from sejm_api.core import dependencies
from sejm_api.core.config import Settings
from sejm_api.lib.districts import DistrictResolver, DistrictSet
from sejm_api.lib.geocoder import NominatimGeocoder


@pytest.fixture(autouse=True)
def _reset_session():
    dependencies._session = None
    yield
    dependencies._session = None


class TestDistrictDependencies:
    """Tests for district set and resolver providers."""

    def test_packaged_district_set(self, settings: Settings) -> None:
        district_set = dependencies.get_district_set(settings)
        assert isinstance(district_set, DistrictSet)
        assert len(district_set) == 41

    def test_district_set_is_cached(self, settings: Settings) -> None:
        assert dependencies.get_district_set(settings) is dependencies.get_district_set(settings)

    def test_resolver_wraps_set(self, district_set: DistrictSet) -> None:
        resolver = dependencies.get_resolver(district_set)
        assert isinstance(resolver, DistrictResolver)
        assert resolver.district_set is district_set


class TestGeocoderDependency:
    def test_configured_from_settings(self) -> None:
        settings = Settings(_env_file=None, geocoder_timeout=3.0, geocoder_user_agent="Test/1.0")  # type: ignore[call-arg]
        geocoder = dependencies.get_geocoder(settings)
        assert isinstance(geocoder, NominatimGeocoder)
        assert geocoder._timeout == 3.0
        assert geocoder._user_agent == "Test/1.0"


class TestSejmSessionDependency:
    """Tests for the process-wide Sejm session."""

    async def test_singleton(self, settings: Settings) -> None:
        first = await dependencies.get_sejm_session(settings)
        assert await dependencies.get_sejm_session(settings) is first
        assert first.client.term == settings.sejm_term

    async def test_concurrent_first_requests_share_one_session(self, settings: Settings) -> None:
        with patch.object(dependencies, "create_session", wraps=dependencies.create_session) as mock_create:
            sessions = await asyncio.gather(*(dependencies.get_sejm_session(settings) for _ in range(5)))
        assert all(s is sessions[0] for s in sessions)
        mock_create.assert_called_once()
        await dependencies.close_sejm_session()

    async def test_close_forgets_session(self, settings: Settings) -> None:
        session = await dependencies.get_sejm_session(settings)
        with patch.object(session.client, "close", new_callable=AsyncMock) as mock_close:
            await dependencies.close_sejm_session()
        mock_close.assert_awaited_once()
        assert dependencies._session is None
        assert await dependencies.get_sejm_session(settings) is not session

    async def test_close_without_session_is_noop(self) -> None:
        await dependencies.close_sejm_session()
        assert dependencies._session is None
