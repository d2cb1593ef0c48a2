# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Command Line Interface

Usage:
    callflow-api serve                 # Start API server
    callflow-api profiles              # List connection profiles
    callflow-api resolve Staging hrVA  # Resolve one profile
"""

import typer
from rich.console import Console
from rich.table import Table

from callflow_core.exceptions.hierarchy import ConfigurationError

from .core.profiles import ProfileResolver
from .core.settings import get_settings

app = typer.Typer(name="callflow-api", help="Callflow Editor API")
console = Console()


# ============================================================
# SERVER COMMANDS
# ============================================================


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind to (default: HOST setting)"),
    port: int | None = typer.Option(None, help="Port to bind to (default: PORT setting)"),
    reload: bool = typer.Option(False, help="Enable auto-reload (development)"),
):
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting {settings.app_name} on {host}:{port}[/]")
    console.print(f"API prefix: [cyan]{settings.api_prefix or '/'}[/]")

    uvicorn.run(
        "callflow_api.gateway.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# ============================================================
# PROFILE COMMANDS
# ============================================================


@app.command()
def profiles():
    """List every environment/tenant connection profile."""
    resolver = ProfileResolver.from_settings(get_settings())

    table = Table(title="Connection Profiles")
    table.add_column("Environment", style="cyan")
    table.add_column("VA")
    table.add_column("Endpoint")
    table.add_column("Database", style="green")
    table.add_column("Container")

    for profile in resolver:
        p = profile.to_public_dict()
        table.add_row(p["environment"], p["tenant"], p["endpoint"], p["database"], p["container"])

    console.print(table)


@app.command()
def resolve(
    env: str = typer.Argument(..., help="Environment (DEV, Staging, PROD)"),
    va: str = typer.Argument(..., help="Virtual assistant (internalVA, aunjaiVA, ...)"),
):
    """Resolve the connection profile for an environment/tenant pair."""
    resolver = ProfileResolver.from_settings(get_settings())
    try:
        profile = resolver.resolve(env, va)
    except ConfigurationError as e:
        console.print(f"[red]{e.message}[/]")
        raise typer.Exit(1) from e

    for name, value in profile.to_public_dict().items():
        console.print(f"{name}: [green]{value}[/]")


def main():
    app()


if __name__ == "__main__":
    main()
