"""CLI commands for representatives and their voting records."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from sejm_api.core.config import get_settings
from sejm_api.lib.districts import DistrictDataError, DistrictResolver, load_district_set
from sejm_api.lib.geocoder import GeocodingProviderError, geocoder_from_settings
from sejm_api.lib.sejm import SejmApiError
from sejm_api.services import representative_service

representatives_app = typer.Typer()


@representatives_app.command("list")
def list_cmd(
    district: Annotated[int | None, typer.Option("--district", help="District number (1-41)")] = None,
    name: Annotated[str | None, typer.Option("--name", help="Name substring, any order")] = None,
    postal_code: Annotated[str | None, typer.Option("--postal-code", help="Postal code resolved to a district")] = None,
) -> None:
    """List representatives, optionally filtered."""
    asyncio.run(_list_impl(district, name, postal_code))


async def _list_impl(district: int | None, name: str | None, postal_code: str | None) -> None:
    """Async implementation of the list command."""
    settings = get_settings()
    session = representative_service.create_session(settings)
    try:
        reps, district_number = await representative_service.list_representatives(
            session,
            district=district,
            name=name,
            postal_code=postal_code,
            geocoder=geocoder_from_settings(settings),
            resolver=DistrictResolver(load_district_set(settings.district_table_path)),
        )
    except LookupError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=3) from e
    except ValueError as e:
        typer.echo(f"Invalid postal code: {e}", err=True)
        raise typer.Exit(code=2) from e
    except DistrictDataError as e:
        typer.echo(f"Invalid district data: {e}", err=True)
        raise typer.Exit(code=1) from e
    except (GeocodingProviderError, SejmApiError) as e:
        typer.echo(f"Data source unavailable: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await session.close()

    if district_number is not None:
        typer.echo(f"District {district_number}: {len(reps)} representatives")
    for rep in reps:
        where = f"okręg {rep.district_number}" if rep.district_number is not None else ""
        typer.echo(f"{rep.id:>4}  {rep.last_name} {rep.first_name}  [{rep.club}]  {where}".rstrip())


@representatives_app.command("votes")
def votes_cmd(
    mp_id: Annotated[int, typer.Argument(help="Representative id")],
    more: Annotated[int, typer.Option("--more", help="Widen the window this many extra steps", min=0)] = 0,
) -> None:
    """Show a representative's recent chamber votes."""
    asyncio.run(_votes_impl(mp_id, more))


async def _votes_impl(mp_id: int, more: int) -> None:
    """Async implementation of the votes command."""
    settings = get_settings()
    session = representative_service.create_session(settings)
    try:
        if more:
            state = await representative_service.load_more_votes(session, mp_id, steps=more)
        else:
            state = await representative_service.get_votes(session, mp_id)
    except LookupError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=3) from e
    except SejmApiError as e:
        typer.echo(f"Sejm API unavailable: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await session.close()

    typer.echo(f"MP {mp_id}: {len(state.votes)} votes in the last {state.window_days} days")
    for vote in state.votes:
        typer.echo(
            f"{vote.date.isoformat()}  pos. {vote.sitting_number} gł. {vote.voting_number:<4} "
            f"{vote.vote_label:<14} {vote.topic}"
        )
