#!/usr/bin/env python3
"""
Main CLI entry point for the usergraph server.
"""

import os
import sys

import click
import uvicorn

from usergraph import __version__
from usergraph.config import get_settings
from usergraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="usergraph")
def cli() -> None:
    """usergraph CLI - run the GraphQL server."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: $HOST or 0.0.0.0)")
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind to (default: $PORT or 4000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: $LOG_LEVEL or info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str | None) -> None:
    """Start the usergraph API server."""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    log_level = log_level or settings.log_level.lower()
    debug = settings.debug or log_level == "debug"

    configure_logging(debug=debug, level=log_level)

    logger.info(
        "Starting usergraph API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The factory re-reads settings from the environment, including in reload workers
    if log_level == "debug":
        os.environ["DEBUG"] = "true"
    os.environ["LOG_LEVEL"] = log_level

    try:
        uvicorn.run(
            "usergraph.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload or settings.reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
