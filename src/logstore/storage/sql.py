"""
Fixed statement shapes for the three logging tables.
"""

from typing import Sequence

from ..errors import ConfigurationError

EVENT_TABLE = "logging_event"
PROPERTY_TABLE = "logging_event_property"
EXCEPTION_TABLE = "logging_event_exception"

EVENT_COLUMNS = (
    "timestmp",
    "formatted_message",
    "logger_name",
    "level_string",
    "thread_name",
    "reference_flag",
    "caller_filename",
    "caller_class",
    "caller_method",
    "caller_line",
)
PROPERTY_COLUMNS = ("event_id", "mapped_key", "mapped_value")
EXCEPTION_COLUMNS = ("event_id", "i", "trace_line")

PARAMSTYLES = ("qmark", "format", "pyformat", "numeric", "named")


def placeholder(paramstyle: str, position: int) -> str:
    """Positional placeholder for a DB-API paramstyle (position is 1-based)."""
    if paramstyle == "qmark":
        return "?"
    if paramstyle in ("format", "pyformat"):
        return "%s"
    # Named drivers (oracledb) bind a sequence by position as well
    if paramstyle in ("numeric", "named"):
        return f":{position}"
    raise ConfigurationError(f"Unsupported paramstyle: {paramstyle!r}")


def insert_statement(table: str, columns: Sequence[str], paramstyle: str = "qmark") -> str:
    """Build "INSERT INTO table (cols) VALUES (...)" for the given paramstyle."""
    values = ", ".join(placeholder(paramstyle, i) for i in range(1, len(columns) + 1))
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({values})"


def insert_event_sql(paramstyle: str = "qmark") -> str:
    return insert_statement(EVENT_TABLE, EVENT_COLUMNS, paramstyle)


def insert_properties_sql(paramstyle: str = "qmark") -> str:
    return insert_statement(PROPERTY_TABLE, PROPERTY_COLUMNS, paramstyle)


def insert_exception_sql(paramstyle: str = "qmark") -> str:
    return insert_statement(EXCEPTION_TABLE, EXCEPTION_COLUMNS, paramstyle)
