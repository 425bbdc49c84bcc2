"""Typer CLI root application with serve command."""

import typer

from sejm_api.core.config import get_settings
from sejm_api.core.logging import setup_logging

app = typer.Typer(name="sejm-api", help="Polish Sejm districts, representatives and votes CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "sejm_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from sejm_api.cli.districts_cmd import districts_app
    from sejm_api.cli.representatives_cmd import representatives_app

    app.add_typer(districts_app, name="districts", help="Electoral district commands")
    app.add_typer(representatives_app, name="representatives", help="Representative and vote commands")


_register_subcommands()
