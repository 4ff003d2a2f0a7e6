from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer
import uvicorn
from rich import box
from rich.console import Console
from rich.table import Table

from killboard.config import Settings, get_settings
from killboard.infrastructure.db_factory import close_pool, open_pool
from killboard.infrastructure.executor import QueryExecutor, StoreFailure
from killboard.infrastructure.schema import create_tables
from killboard.repositories.users import UserRepository
from killboard.utils.logging import configure_logging

app = typer.Typer(help="killboard users/statistics service CLI.")


def _settings_table(settings: Settings) -> Table:
    table = Table(title="killboard configuration", box=box.ROUNDED)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")

    table.add_row("Database", f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}")
    table.add_row("Password", "****" if settings.db_password else "(empty)")
    table.add_row("Connection limit", str(settings.db_connection_limit))
    table.add_row("Listen", f"{settings.host}:{settings.port}")
    table.add_row("TLS", "on" if settings.ssl_certfile and settings.ssl_keyfile else "off")
    table.add_row("Trusted hosts", ", ".join(settings.trusted_hosts))
    table.add_row("Environment", settings.app_env)
    table.add_row("Log level", settings.log_level)
    return table


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    Console().print(_settings_table(get_settings()))


@app.command("init-db")
def init_db() -> None:
    """
    Create the users and statistics tables if they do not exist.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    create_tables(settings.pool_config().conninfo())
    typer.echo("Schema ready.")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)."),
) -> None:
    """
    Run the HTTP API.
    """
    from killboard.api.app import create_app

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    tls = bool(settings.ssl_certfile and settings.ssl_keyfile)
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        ssl_certfile=settings.ssl_certfile if tls else None,
        ssl_keyfile=settings.ssl_keyfile if tls else None,
        log_config=None,
    )


async def _prune(settings: Settings, kills: int) -> int:
    pool = await open_pool(settings.pool_config(), attempts=settings.db_connect_attempts)
    try:
        return await UserRepository(QueryExecutor(pool)).remove_below_kill_threshold(kills)
    finally:
        await close_pool(pool)


@app.command()
def prune(
    kills: int = typer.Option(
        ...,
        "--kills",
        "-k",
        min=0,
        help="Delete users whose total kills are below this value.",
    ),
) -> None:
    """
    Delete users whose summed kills fall below a threshold.

    Users without any statistics are left untouched.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    try:
        deleted = asyncio.run(_prune(settings, kills))
    except StoreFailure as exc:
        typer.echo(f"Prune failed: {exc.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Deleted {deleted} user(s) with fewer than {kills} kills.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
