"""
Statement-level writers for the event, property and exception tables.

All writers work on plain DB-API 2.0 connections and cursors. Driver
exceptions are re-raised as WriteError; nothing here retries.
"""

import logging
from contextlib import closing
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..config import RowCountPolicy
from ..errors import KeyResolutionError, SoftIntegrityWarning, WriteError
from ..events import LoggingEventRecord
from .capabilities import GENERATED_KEYS, DriverCapabilities
from .helpers import compute_reference_mask
from .sql import insert_event_sql

logger = logging.getLogger(__name__)

Row = Tuple[Any, ...]


def execute(cursor: Any, sql: str, params: Sequence[Any] = ()) -> None:
    """cursor.execute() with driver errors wrapped in WriteError."""
    try:
        cursor.execute(sql, params)
    except Exception as e:
        raise WriteError(f"Statement failed: {e}") from e


def execute_many(cursor: Any, sql: str, rows: List[Row]) -> None:
    """cursor.executemany() with driver errors wrapped in WriteError."""
    try:
        cursor.executemany(sql, rows)
    except Exception as e:
        raise WriteError(f"Batch of {len(rows)} statements failed: {e}") from e


class EventRowWriter:
    """Binds and inserts the parent logging_event row."""

    def __init__(self, paramstyle: str = "qmark", row_count_policy: RowCountPolicy = RowCountPolicy.WARN):
        self.insert_sql = insert_event_sql(paramstyle)
        self.row_count_policy = RowCountPolicy(row_count_policy)

    def bind(self, event: LoggingEventRecord) -> Row:
        """
        The ten parameters of the event insert, in column order.

        Caller columns stay None (NULL) when there is no first caller frame.
        """
        caller_file = caller_class = caller_method = caller_line = None
        caller = event.first_caller
        if caller is not None:
            caller_file = caller.file_name
            caller_class = caller.class_name
            caller_method = caller.method_name
            caller_line = str(caller.line_number)

        return (
            event.timestamp,
            event.formatted_message,
            event.logger_name,
            event.level,
            event.thread_name,
            compute_reference_mask(event),
            caller_file,
            caller_class,
            caller_method,
            caller_line,
        )

    def write(self, cursor: Any, event: LoggingEventRecord) -> int:
        """Execute the event insert and return the reported row count."""
        execute(cursor, self.insert_sql, self.bind(event))
        update_count = cursor.rowcount
        if update_count != 1:
            warning = SoftIntegrityWarning(update_count)
            if self.row_count_policy is RowCountPolicy.ABORT:
                raise WriteError(str(warning))
            logger.warning("%s", warning)
        return update_count


class GeneratedKeyResolver:
    """
    Obtains the id assigned to the event row that was just inserted.

    The strategy is fixed at construction from the driver capabilities:
    cursor.lastrowid when generated keys are supported, otherwise the
    dialect's select-insert-id query on a separate cursor.
    """

    def __init__(self, capabilities: DriverCapabilities):
        self.strategy = capabilities.key_strategy
        self.select_insert_id_sql = capabilities.select_insert_id_sql

    def resolve(self, insert_cursor: Any, connection: Any) -> int:
        if self.strategy == GENERATED_KEYS:
            key = getattr(insert_cursor, "lastrowid", None)
            if key is not None:
                return int(key)
            if not self.select_insert_id_sql:
                raise KeyResolutionError("Driver returned no generated key for the event row")
            logger.debug("No generated key on cursor, falling back to %r", self.select_insert_id_sql)
        return self._select_insert_id(connection)

    def _select_insert_id(self, connection: Any) -> int:
        try:
            with closing(connection.cursor()) as cursor:
                cursor.execute(self.select_insert_id_sql)
                row = cursor.fetchone()
        except Exception as e:
            raise KeyResolutionError(f"Select-insert-id query failed: {e}") from e

        if not row or row[0] is None:
            raise KeyResolutionError(
                f"Select-insert-id query returned no value: {self.select_insert_id_sql!r}"
            )
        return int(row[0])


class ChildBatchWriter:
    """
    Inserts child rows that reference an event id.

    One cursor per write() call, closed before returning. With batch
    updates every row goes through a single executemany(); otherwise each
    row is executed on its own, in order.
    """

    def __init__(self, name: str, sql: str, supports_batch_updates: bool):
        self.name = name
        self.sql = sql
        self.supports_batch_updates = supports_batch_updates

    def write(self, connection: Any, rows: List[Row]) -> int:
        if not rows:
            return 0

        with closing(connection.cursor()) as cursor:
            if self.supports_batch_updates:
                execute_many(cursor, self.sql, rows)
            else:
                for row in rows:
                    execute(cursor, self.sql, row)

        logger.debug("Wrote %d %s rows", len(rows), self.name)
        return len(rows)


def property_rows(event_id: int, properties: Mapping[str, str]) -> List[Row]:
    return [(event_id, key, value) for key, value in properties.items()]


def exception_rows(event_id: int, trace_lines: Optional[Sequence[str]]) -> List[Row]:
    """Rows (event_id, i, line) with i running 0..N-1 in original order."""
    if not trace_lines:
        return []
    return [(event_id, i, str(line)) for i, line in enumerate(trace_lines)]
