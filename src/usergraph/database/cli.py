#!/usr/bin/env python3
"""
CLI entry point for usergraph database migrations.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from alembic import command
from alembic.config import Config
from usergraph import __version__
from usergraph.logging import configure_logging, get_logger

logger = get_logger(__name__)

ALEMBIC_INI_ENV = "USERGRAPH_ALEMBIC_INI"


def get_alembic_config() -> Config:
    """Get Alembic configuration.

    Uses ``$USERGRAPH_ALEMBIC_INI`` when set, otherwise the alembic.ini at the
    project root (next to ``src/``), then the one in the working directory.
    """
    override = os.getenv(ALEMBIC_INI_ENV)
    if override:
        alembic_ini = Path(override)
    else:
        project_dir = Path(__file__).resolve().parent.parent.parent.parent
        alembic_ini = project_dir / "alembic.ini"
        if not alembic_ini.exists():
            alembic_ini = Path.cwd() / "alembic.ini"

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    return Config(str(alembic_ini))


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="usergraph-migrate")
def main(log_level: str) -> None:
    """usergraph database migration management."""
    configure_logging(debug=(log_level == "debug"), level=log_level)


def run_alembic(name: str, action: Callable[..., Any], *args: str) -> None:
    """Run an Alembic command against the resolved usergraph config, exiting 1 on failure."""
    try:
        config = get_alembic_config()
    except FileNotFoundError as e:
        logger.error("Migration config not found", command=name, error=str(e))
        sys.exit(1)

    log = logger.bind(command=name, alembic_ini=config.config_file_name)
    log.info("Running migration command", args=list(args))
    try:
        action(config, *args)
    except Exception as e:
        log.error("Migration command failed", error=str(e))
        sys.exit(1)
    log.info("Migration command finished")


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Apply migrations up to a revision (default: head)."""
    run_alembic("upgrade", command.upgrade, revision)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Revert migrations down to a revision (default: -1)."""
    run_alembic("downgrade", command.downgrade, revision)


@main.command()
def current() -> None:
    """Show the revision the users table is at."""
    run_alembic("current", command.current)


@main.command()
def history() -> None:
    """List the usergraph migrations."""
    run_alembic("history", command.history)


if __name__ == "__main__":
    main()
