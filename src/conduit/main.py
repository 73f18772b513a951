"""Main entry point for Conduit using Typer and Pydantic Settings."""

import typer
import uvicorn
from loguru import logger

from conduit.logging import setup_logging
from conduit.settings import get_settings

app = typer.Typer()


HOST_OPTION = typer.Option(
    None,
    help="Host to bind the server to (overrides CONDUIT_HOST)",
    metavar="<server>",
)  # fmt: skip
PORT_OPTION = typer.Option(
    None,
    help="Port to bind the server to (overrides CONDUIT_PORT)",
    metavar="<port>",
)  # fmt: skip
RELOAD_OPTION = typer.Option(
    None,
    help="Enable/disable auto-reload (overrides CONDUIT_RELOAD)",
)  # fmt: skip
LOG_LEVEL_OPTION = typer.Option(
    None,
    help="Log level (overrides CONDUIT_LOG_LEVEL)",
    metavar="<level>",
    case_sensitive=False,
)  # fmt: skip
DEBUG_OPTION = typer.Option(
    None,
    help="Expose error details in responses (overrides CONDUIT_DEBUG)",
)  # fmt: skip
SQL_LOG_OPTION = typer.Option(
    None,
    help="Enable/disable SQL query logging (overrides CONDUIT_SQL_LOG)",
)  # fmt: skip
DATABASE_URL_OPTION = typer.Option(
    None,
    help="Database URL for sql backends (overrides CONDUIT_DATABASE_URL)",
    metavar="<dsn>",
)  # fmt: skip


def _update_settings(
    host: str | None,
    port: int | None,
    log_level: str | None,
    reload: bool | None,
    debug: bool | None,
    sql_log: bool | None,
    database_url: str | None,
) -> None:
    """Update the cached settings with CLI overrides.

    With ``--reload`` the server runs in a child process that reads settings
    from the environment again, so only environment values apply there.
    """
    settings = get_settings()

    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if log_level is not None:
        settings.log_level = log_level.upper()
    if reload is not None:
        settings.reload = reload
    if debug is not None:
        settings.debug = debug
    if sql_log is not None:
        settings.sql_log = sql_log
    if database_url is not None:
        settings.database_url = database_url


@app.command()
def run(
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    reload: bool = RELOAD_OPTION,
    debug: bool = DEBUG_OPTION,
    sql_log: bool = SQL_LOG_OPTION,
    database_url: str = DATABASE_URL_OPTION,
) -> None:
    """Run the Conduit server."""
    _update_settings(host, port, log_level, reload, debug, sql_log, database_url)

    settings = get_settings()

    setup_logging(settings.log_level, sql_log=settings.sql_log)

    logger.info(f"Starting Conduit on {settings.host}:{settings.port}")
    logger.info(f"Reload: {settings.reload}")

    uvicorn.run(
        "conduit.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def version() -> None:
    """Print the installed Conduit version."""
    from conduit.utils.version import get_version

    typer.echo(get_version().version)


if __name__ == "__main__":
    app()
