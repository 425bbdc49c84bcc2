"""Integration tests for the `representatives` CLI commands."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from sejm_api.cli.app import app
from sejm_api.lib.districts import DistrictDataError
from sejm_api.lib.geocoder.base import GeocodedLocation
from sejm_api.lib.sejm import SejmApiError
from sejm_api.services.representative_service import create_session

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging():
    with patch("sejm_api.cli.app.setup_logging"):
        yield


@pytest.fixture
def mock_geocoder():
    geocoder = MagicMock()
    geocoder.geocode_postal_code = AsyncMock(return_value=None)
    with patch("sejm_api.cli.representatives_cmd.geocoder_from_settings", return_value=geocoder):
        yield geocoder


@pytest.fixture
def stub_session(settings, sejm_client, representatives):
    """Route the CLI's session factory to a session over the stub Sejm client."""
    sejm_client.fetch_mps.return_value = representatives
    session = create_session(settings, client=sejm_client, today=lambda: date(2025, 6, 30))
    with patch(
        "sejm_api.cli.representatives_cmd.representative_service.create_session",
        return_value=session,
    ):
        yield session


class TestRepresentativesListCLI:
    """Tests for `representatives list`."""

    def test_lists_sorted_roster(self, stub_session, mock_geocoder, sejm_client):
        result = runner.invoke(app, ["representatives", "list"])
        assert result.exit_code == 0
        lines = result.output.rstrip().splitlines()
        assert lines == [
            "   4  Kowalski Adam  [niezrzeszony]  okręg 24",
            "   1  Kowalski Jan  [PiS]  okręg 19",
            "   2  Łęcki Łukasz  [PSL]  okręg 8",
            "   3  Żak Anna  [KO]  okręg 19",
        ]
        sejm_client.close.assert_awaited_once()

    def test_filter_by_district(self, stub_session, mock_geocoder):
        result = runner.invoke(app, ["representatives", "list", "--district", "19"])
        assert result.exit_code == 0
        assert result.output.startswith("District 19: 2 representatives")

    def test_filter_by_name(self, stub_session, mock_geocoder):
        result = runner.invoke(app, ["representatives", "list", "--name", "lecki"])
        assert result.exit_code == 0
        assert "Łęcki Łukasz" in result.output
        assert "Kowalski" not in result.output

    def test_filter_by_postal_code(self, stub_session, mock_geocoder):
        mock_geocoder.geocode_postal_code.return_value = GeocodedLocation(city="Gorzów Wielkopolski", voivodeship="lubuskie")
        result = runner.invoke(app, ["representatives", "list", "--postal-code", "66-400"])
        assert result.exit_code == 0
        assert result.output.startswith("District 8: 1 representatives")

    def test_unresolvable_postal_code_exits_3(self, stub_session, mock_geocoder, sejm_client):
        result = runner.invoke(app, ["representatives", "list", "--postal-code", "99-999"])
        assert result.exit_code == 3
        sejm_client.close.assert_awaited_once()

    def test_blank_postal_code_exits_2(self, stub_session, mock_geocoder):
        result = runner.invoke(app, ["representatives", "list", "--postal-code", "  "])
        assert result.exit_code == 2
        mock_geocoder.geocode_postal_code.assert_not_awaited()

    def test_invalid_district_table_exits_1(self, stub_session, mock_geocoder):
        with patch(
            "sejm_api.cli.representatives_cmd.load_district_set",
            side_effect=DistrictDataError("Invalid district table", ["district 8 has an empty scope"]),
        ):
            result = runner.invoke(app, ["representatives", "list", "--postal-code", "66-400"])
        assert result.exit_code == 1

    def test_sejm_failure_exits_1(self, stub_session, mock_geocoder, sejm_client):
        sejm_client.fetch_mps.side_effect = SejmApiError("sejm", "Request timed out for /MP")
        result = runner.invoke(app, ["representatives", "list"])
        assert result.exit_code == 1


class TestRepresentativesVotesCLI:
    """Tests for `representatives votes`."""

    def test_first_page(self, stub_session):
        result = runner.invoke(app, ["representatives", "votes", "1"])
        assert result.exit_code == 0
        lines = result.output.rstrip().splitlines()
        assert lines[0] == "MP 1: 8 votes in the last 90 days"
        assert lines[1].startswith("2025-06-26  pos. 35 gł. 262")
        assert "PRZECIW" in lines[1]

    def test_more_steps(self, stub_session):
        result = runner.invoke(app, ["representatives", "votes", "1", "--more", "3"])
        assert result.exit_code == 0
        assert result.output.startswith("MP 1: 14 votes in the last 360 days")

    def test_negative_more_rejected(self, stub_session):
        result = runner.invoke(app, ["representatives", "votes", "1", "--more", "-1"])
        assert result.exit_code != 0

    def test_unknown_representative_exits_3(self, stub_session, sejm_client):
        result = runner.invoke(app, ["representatives", "votes", "999999"])
        assert result.exit_code == 3
        sejm_client.fetch_votes_for_day.assert_not_awaited()
        sejm_client.close.assert_awaited_once()

    def test_unknown_representative_with_more_exits_3(self, stub_session):
        result = runner.invoke(app, ["representatives", "votes", "999999", "--more", "2"])
        assert result.exit_code == 3

    def test_calendar_failure_exits_1(self, stub_session, sejm_client):
        sejm_client.fetch_proceedings.side_effect = SejmApiError("sejm", "HTTP 500", 500)
        result = runner.invoke(app, ["representatives", "votes", "1"])
        assert result.exit_code == 1
        sejm_client.close.assert_awaited_once()
