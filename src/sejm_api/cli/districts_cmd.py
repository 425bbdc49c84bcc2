"""CLI commands for electoral districts: list and postal-code resolution."""

import asyncio
from typing import Annotated

import typer

from sejm_api.core.config import get_settings
from sejm_api.lib.districts import DistrictDataError, DistrictResolver, load_district_set
from sejm_api.lib.geocoder import GeocodingProviderError, geocoder_from_settings
from sejm_api.services.district_service import list_districts, resolve_district

districts_app = typer.Typer()


@districts_app.command("list")
def list_cmd() -> None:
    """List all 41 Sejm electoral districts."""
    settings = get_settings()
    try:
        district_set = load_district_set(settings.district_table_path)
    except DistrictDataError as e:
        typer.echo(f"Invalid district data: {e}", err=True)
        raise typer.Exit(code=1) from e

    for d in list_districts(district_set):
        area = d.voivodeship or "?"
        seats = f"{d.seats} seats" if d.seats else ""
        typer.echo(f"{d.district_number:>2}  {d.seat_city:<20} {area:<22} {seats}".rstrip())


@districts_app.command("resolve")
def resolve_cmd(
    postal_code: Annotated[str, typer.Argument(help="Postal code, NN-NNN or NNNNN")],
) -> None:
    """Resolve a postal code to its electoral district."""
    asyncio.run(_resolve_impl(postal_code))


async def _resolve_impl(postal_code: str) -> None:
    """Async implementation of the resolve command."""
    settings = get_settings()
    try:
        resolver = DistrictResolver(load_district_set(settings.district_table_path))
    except DistrictDataError as e:
        typer.echo(f"Invalid district data: {e}", err=True)
        raise typer.Exit(code=1) from e
    geocoder = geocoder_from_settings(settings)

    try:
        resolution = await resolve_district(geocoder, resolver, postal_code)
    except ValueError as e:
        typer.echo(f"Invalid postal code: {e}", err=True)
        raise typer.Exit(code=2) from e
    except GeocodingProviderError as e:
        typer.echo(f"Geocoding failed: {e}", err=True)
        raise typer.Exit(code=1) from e

    if resolution is None:
        typer.echo(f"Could not determine the electoral district for {postal_code}", err=True)
        raise typer.Exit(code=3)

    location = resolution.match.location
    typer.echo(
        f"Postal code: {resolution.postal_code}\n"
        f"  District: {resolution.district_number} ({resolution.descriptor.seat_city})\n"
        f"  Matched by: {resolution.match.tier.value}\n"
        f"  Location: {location.city or '-'} / {location.county or '-'} / {location.voivodeship or '-'}"
    )
