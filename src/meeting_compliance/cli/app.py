"""Typer CLI root application with serve command."""

import typer

from meeting_compliance.core.config import get_settings
from meeting_compliance.core.logging import setup_logging

app = typer.Typer(name="meeting-compliance", help="Indiana public meeting compliance CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "meeting_compliance.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from meeting_compliance.cli.deadlines_cmd import deadlines_app
    from meeting_compliance.cli.meetings_cmd import meetings_app

    app.add_typer(deadlines_app, name="deadlines", help="Publication deadline commands")
    app.add_typer(meetings_app, name="meetings", help="Meeting workflow and quorum commands")


_register_subcommands()
