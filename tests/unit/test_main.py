"""Tests for the FastAPI application factory module."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from sejm_api.core.config import Settings
from sejm_api.lib.districts import DistrictDataError
from sejm_api.main import create_app, lifespan


class TestCreateApp:
    """Tests for create_app."""

    @pytest.fixture
    def app(self):
        with patch("sejm_api.main.get_settings", return_value=Settings(_env_file=None)):  # type: ignore[call-arg]
            return create_app()

    def test_app_is_created(self, app) -> None:
        assert app.title == "Sejm API"

    def test_openapi_lists_routes(self, app) -> None:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/v1/districts/resolve" in paths
        assert "/api/v1/representatives/{mp_id}/votes/more" in paths

    def test_value_error_handler_registered(self, app) -> None:
        assert app.exception_handlers.get(ValueError) is not None


class TestAppLifespan:
    """Tests for lifespan management."""

    async def test_loads_districts_and_closes_session(self) -> None:
        with (
            patch("sejm_api.main.get_settings", return_value=Settings(_env_file=None)),  # type: ignore[call-arg]
            patch("sejm_api.main.setup_logging") as mock_setup_logging,
            patch("sejm_api.main.load_district_set") as mock_load,
            patch("sejm_api.main.close_sejm_session", new_callable=AsyncMock) as mock_close,
        ):
            async with lifespan(MagicMock()):
                mock_setup_logging.assert_called_once()
                mock_load.assert_called_once_with(None)
                mock_close.assert_not_awaited()

            mock_close.assert_awaited_once()

    async def test_invalid_district_data_fails_startup(self) -> None:
        with (
            patch("sejm_api.main.get_settings", return_value=Settings(_env_file=None)),  # type: ignore[call-arg]
            patch("sejm_api.main.setup_logging"),
            patch("sejm_api.main.load_district_set", side_effect=DistrictDataError("bad table", ["missing districts [41]"])),
            pytest.raises(DistrictDataError),
        ):
            async with lifespan(MagicMock()):
                pass
