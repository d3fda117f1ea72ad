"""
Append command for CLI.
"""

import sqlite3
import sys
import threading
import time
from typing import Dict, Tuple

import click
from rich.console import Console
from rich.table import Table

from ...config import config
from ...errors import LogStoreError
from ...events import LoggingEventRecord
from ...storage.capabilities import DriverCapabilities
from ...storage.db_appender import DBAppender, transaction

console = Console()


def _parse_properties(pairs: Tuple[str, ...]) -> Dict[str, str]:
    properties = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}")
        properties[key] = value
    return properties


@click.command("append")
@click.argument("db_path", type=click.Path(exists=True, dir_okay=False), required=False)
@click.option("--message", "-m", required=True, help="Formatted log message")
@click.option("--level", "-l", default="INFO", help="Level label")
@click.option("--logger", "-n", "logger_name", default="logstore.cli", help="Logger name")
@click.option("--property", "-p", "event_pairs", multiple=True, help="Event property key=value")
@click.option("--context", "-c", "context_pairs", multiple=True, help="Context property key=value")
@click.option("--trace-line", "-t", "trace_lines", multiple=True, help="Exception stack trace line")
def append_command(db_path, message, level, logger_name, event_pairs, context_pairs, trace_lines):
    """
    Append one logging event to a SQLite database.

    The database must already contain the logging_event,
    logging_event_property and logging_event_exception tables.
    """
    try:
        event_properties = _parse_properties(event_pairs)
        context_properties = _parse_properties(context_pairs)
    except click.BadParameter as e:
        console.print(f"[red]Error: {e.message}[/red]")
        sys.exit(2)

    event = LoggingEventRecord(
        timestamp=int(time.time() * 1000),
        formatted_message=message,
        logger_name=logger_name,
        level=level.upper(),
        thread_name=threading.current_thread().name,
        throwable=trace_lines or None,
        context_properties=context_properties,
        event_properties=event_properties,
    )

    conn = sqlite3.connect(str(db_path or config.db_path))
    try:
        capabilities = DriverCapabilities.detect(
            conn, dialect=config.dialect, **config.capability_overrides()
        )
        appender = DBAppender(capabilities, config.row_count_policy)
        with transaction(conn):
            result = appender.append(event, conn)
    except (LogStoreError, sqlite3.Error) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    finally:
        conn.close()

    table = Table(title="Appended Event", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="yellow")
    table.add_row("event_id", str(result.event_id))
    table.add_row("reference_flag", str(result.reference_mask))
    table.add_row("key_strategy", capabilities.key_strategy)
    table.add_row("properties", str(result.property_count))
    table.add_row("exception lines", str(result.exception_count))
    console.print(table)
