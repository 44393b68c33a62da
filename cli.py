#!/usr/bin/env python3
"""
Posta CLI.

Operational entry point: run the API, prepare the database and repair
tag counters. Select the operation with --service.

Usage:
    python cli.py --service server --reload
    python cli.py --service init-db
    python cli.py --service reconcile-tags --user-id user_123
    python cli.py --service health
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.backend.core.logging import get_logger, log_with_source, setup_logging

SERVICES = ["server", "init-db", "reconcile-tags", "health", "config", "test", "info"]


def validate_project_root() -> Path:
    """Exit unless cli.py sits next to the .project_root marker."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(SERVICES),
    default="info",
    help="Operation to run.",
)
@click.option("--verbose", "-v", is_flag=True, help="INFO level logging.")
@click.option("--debug", "-d", is_flag=True, help="DEBUG level logging.")
@click.option("--host", default=None, help="Server host (server only).")
@click.option("--port", default=None, type=int, help="Server port (server only).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes (server only).")
@click.option("--user-id", default=None, help="Owner whose tags to reconcile (reconcile-tags only).")
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test selection (test only).",
)
@click.option("--coverage", is_flag=True, help="Report coverage (test only).")
def main(
    service: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    user_id: str | None,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Posta CLI.

    \b
    Examples:
        python cli.py --service server --port 8099 --reload
        python cli.py --service init-db
        python cli.py --service reconcile-tags --user-id user_123
        python cli.py --service test --test-type unit --coverage
    """
    validate_project_root()

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=log_level, format_type="console")
    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)
    logger.debug("CLI invoked", extra={"service": service, "log_level": log_level})

    if service == "server":
        run_server(logger, host, port, reload)
    elif service == "init-db":
        init_db(logger)
    elif service == "reconcile-tags":
        reconcile_tags(logger, user_id)
    elif service == "health":
        check_health(logger)
    elif service == "config":
        show_config(logger)
    elif service == "test":
        run_tests(logger, test_type, coverage)
    else:
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Serve the API with uvicorn in the foreground until Ctrl+C."""
    import uvicorn

    from modules.backend.core.config import get_app_config

    try:
        server_config = get_app_config().application.server
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        _fail("Could not load config/settings/application.yaml.")

    server_host = host or server_config.host
    server_port = port or server_config.port
    logger.info("Starting server", extra={"host": server_host, "port": server_port, "reload": reload})
    click.echo(f"Serving at http://{server_host}:{server_port} (Ctrl+C to stop)")

    uvicorn.run(
        "modules.backend.main:app",
        host=server_host,
        port=server_port,
        reload=reload,
        log_config=None,
    )


def init_db(logger) -> None:
    """Create any missing tables. Existing tables and rows are left as they are."""
    from sqlalchemy.exc import SQLAlchemyError

    from modules.backend.core.config import get_app_config
    from modules.backend.core.database import create_all_tables

    driver = get_app_config().database.driver
    logger.info("Initializing database", extra={"driver": driver})

    try:
        asyncio.run(create_all_tables())
    except SQLAlchemyError as e:
        logger.error("Database initialization failed", extra={"error": str(e)})
        _fail(str(e))

    click.echo(click.style(f"Database tables ready ({driver}).", fg="green"))


async def _reconcile(user_id: str) -> list:
    from modules.backend.core.database import get_session_factory
    from modules.backend.services.tag import TagService

    async with get_session_factory()() as session:
        tags = await TagService(session).reconcile_usage_counts(user_id)
        await session.commit()
    return tags


def reconcile_tags(logger, user_id: str | None) -> None:
    """Rewrite one user's stored tag usage counts from their content."""
    from modules.backend.core.exceptions import ApplicationError

    if not user_id:
        _fail("--user-id is required for reconcile-tags.")

    structlog.contextvars.bind_contextvars(user_id=user_id)
    try:
        tags = asyncio.run(_reconcile(user_id))
    except ApplicationError as e:
        logger.error("Tag reconciliation failed", extra={"code": e.code, "error": e.message})
        _fail(e.message)

    log_with_source(logger, "cli", "info", "Tag usage reconciled", user_id=user_id, tags=len(tags))

    if not tags:
        click.echo("No tags found.")
        return
    click.echo(f"Reconciled {len(tags)} tag(s):")
    for tag in tags:
        click.echo(f"  {tag.name}: {tag.actual_usage_count}")


def _check_config() -> str:
    from modules.backend.core.config import get_app_config

    return f"App: {get_app_config().application.name}"


def _check_secrets() -> None:
    from modules.backend.core.config import get_settings

    get_settings()


def _check_app() -> str:
    from modules.backend.main import get_app

    return f"Title: {get_app().title}"


def _check_database() -> None:
    from modules.backend.api.health import check_database

    result = asyncio.run(check_database())
    if result["status"] != "healthy":
        raise ConnectionError(result.get("error", "unreachable"))


def check_health(logger) -> None:
    """Check configuration, secrets, app import and database reachability."""
    checks = [
        ("YAML configuration", _check_config),
        ("Secrets (JWT_SECRET)", _check_secrets),
        ("FastAPI application", _check_app),
        ("Database", _check_database),
    ]

    click.echo("Health Check Results:")
    click.echo("-" * 50)
    failed = 0
    for name, check in checks:
        try:
            detail = check()
            status = click.style("PASS", fg="green")
        except (ImportError, FileNotFoundError, ValueError, ConnectionError) as e:
            detail = str(e).splitlines()[0] if str(e) else type(e).__name__
            status = click.style("FAIL", fg="red")
            failed += 1
            logger.warning("Health check failed", extra={"check": name, "error": str(e)})
        click.echo(f"  {status}  {name}" + (f" ({detail})" if detail else ""))
    click.echo("-" * 50)

    if failed:
        click.echo(click.style(f"{failed} check(s) failed.", fg="yellow"))
        sys.exit(1)
    click.echo(click.style("All checks passed.", fg="green"))


def _echo_section(title: str, values: dict) -> None:
    click.echo(f"\n{title}:")
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"  {key}:")
            for k, v in value.items():
                click.echo(f"    {k}: {v}")
        else:
            click.echo(f"  {key}: {value}")


def show_config(logger) -> None:
    """Print the validated YAML settings. Secrets are never printed."""
    from modules.backend.core.config import get_app_config

    try:
        app_config = get_app_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        _fail(f"Error loading configuration: {e}")

    for section in ("application", "database", "logging", "security", "storage"):
        _echo_section(section, getattr(app_config, section).model_dump())


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run pytest over the selected test tree and exit with its status."""
    target = {"unit": "tests/unit", "integration": "tests/integration"}.get(test_type, "tests/")
    cmd = [sys.executable, "-m", "pytest", target, "-v"]
    if coverage:
        cmd.extend(["--cov=modules/backend", "--cov-report=term-missing"])

    logger.info("Running tests", extra={"cmd": cmd})
    click.echo(f"Running: {' '.join(cmd)}\n")
    sys.exit(subprocess.run(cmd, cwd=PROJECT_ROOT).returncode)


def show_info(logger) -> None:
    """Print the application name, version and available services."""
    from modules.backend.core.config import get_app_config

    try:
        application = get_app_config().application
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load application configuration", extra={"error": str(e)})
        _fail("Could not load application.yaml configuration.")

    click.echo(f"{application.name} {application.version}")
    click.echo(application.description)
    click.echo()
    click.echo("Services (--service):")
    click.echo("  server          Run the API (--host, --port, --reload)")
    click.echo("  init-db         Create database tables")
    click.echo("  reconcile-tags  Recount tag usage for a user (--user-id)")
    click.echo("  health          Check configuration and database")
    click.echo("  config          Display configuration")
    click.echo("  test            Run test suite")
    click.echo("  info            Show this information")


if __name__ == "__main__":
    main()
