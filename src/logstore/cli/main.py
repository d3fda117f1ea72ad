"""
logstore CLI entry point.
"""

import logging

import click

from .commands.append import append_command
from .commands.dialects import dialects_command


def setup_logging(level: str = "WARNING") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Diagnostic log level",
)
def cli(log_level: str):
    """
    logstore CLI

    Write logging events into logging_event tables (default database: LOGSTORE_DB_PATH).
    """
    setup_logging(log_level)


# Register commands
cli.add_command(append_command)
cli.add_command(dialects_command)


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
