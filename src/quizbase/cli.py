"""QuizBase command line.

``quizbase serve`` runs the API under uvicorn, ``quizbase init-db`` creates
the tables, ``quizbase check-mail`` probes the mail transport and
``quizbase info`` prints the effective configuration.
"""

import asyncio
from typing import NoReturn

import click
from sqlalchemy import make_url

from quizbase import __version__
from quizbase.core.config import Settings, get_settings
from quizbase.core.logging import configure_logging, get_logger

APP_IMPORT_PATH = "quizbase.infrastructure.api.app:app"


@click.group()
@click.version_option(version=__version__, prog_name="QuizBase")
def cli() -> None:
    """QuizBase - multiple-choice question bank.

    Settings are read from QUIZBASE_* environment variables and the .env file.
    """


@cli.command()
@click.option("--host", default=None, help="Bind address (default: QUIZBASE_HOST)")
@click.option("--port", type=int, default=None, help="Bind port (default: QUIZBASE_PORT)")
@click.option(
    "--workers", type=int, default=None, help="Worker processes (default: QUIZBASE_WORKERS)"
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Restart on code changes (default: on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)

    if reload is None:
        reload = settings.is_development
    options = {
        "host": host or settings.host,
        "port": port or settings.port,
        # uvicorn only reloads a single process
        "workers": 1 if reload else (workers or settings.workers),
        "reload": reload,
    }
    get_logger(__name__).info(
        "Starting QuizBase server", environment=settings.environment, **options
    )
    uvicorn.run(
        APP_IMPORT_PATH,
        log_level=settings.log_level.lower(),
        access_log=True,
        **options,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the database tables if they do not exist."""
    from quizbase.infrastructure.persistence.database import close_database, init_database

    configure_logging(get_settings())
    if not force:
        click.confirm("Create all database tables?", abort=True, default=False)

    async def run() -> None:
        try:
            await init_database()
        finally:
            await close_database()

    asyncio.run(run())
    click.echo("Database initialized successfully.")


@cli.command()
def check_mail() -> None:
    """Check that the configured mail transport accepts connections."""
    from quizbase.infrastructure.services.email import build_mail_transport

    settings = get_settings()
    configure_logging(settings)
    transport = build_mail_transport(settings)

    ok, error = asyncio.run(transport.test_connection())
    if not ok:
        click.echo(f"Mail transport check failed: {error}", err=True)
        raise SystemExit(1)
    click.echo(f"Mail transport OK ({type(transport).__name__}).")


def _info_sections(settings: Settings) -> dict[str, dict[str, object]]:
    return {
        "Application": {
            "Environment": settings.environment,
            "Debug": settings.debug,
            "API Prefix": settings.api_prefix,
        },
        "Server": {
            "Host": settings.host,
            "Port": settings.port,
            "Workers": settings.workers,
        },
        "Database": {
            "URL": make_url(settings.database_url).render_as_string(hide_password=True),
            "Echo": settings.db_echo,
        },
        "Security": {
            "Token Expire": f"{settings.token_expire_minutes} minutes",
        },
        "Mail": {
            "SMTP Host": settings.smtp_host or "(console)",
            "From": f"{settings.mail_from_name} <{settings.mail_from_email}>",
        },
        "Logging": {
            "Level": settings.log_level,
            "Format": settings.log_format,
        },
    }


@cli.command()
def info() -> None:
    """Display the effective configuration."""
    settings = get_settings()

    click.echo(f"QuizBase v{settings.app_version}")
    click.echo("=" * 40)
    for title, values in _info_sections(settings).items():
        click.echo(f"\n{title}:")
        for label, value in values.items():
            click.echo(f"  {label + ':':<14}{value}")


def main() -> NoReturn:
    """Entry point of the ``quizbase`` script and ``python -m quizbase``."""
    cli()


if __name__ == "__main__":
    main()
