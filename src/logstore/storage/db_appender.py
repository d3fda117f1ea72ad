"""
Appender that normalizes one logging event into three tables.

Write sequence for a single event:
    logging_event row -> event id -> property rows -> exception rows

The appender never begins, commits or rolls back a transaction. Callers
that need the three inserts to be atomic wrap append() in transaction().
"""

import logging
from contextlib import closing, contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from ..config import RowCountPolicy
from ..events import LoggingEventRecord
from .capabilities import DriverCapabilities
from .helpers import compute_reference_mask, merge_property_maps
from .sql import insert_exception_sql, insert_properties_sql
from .writers import (
    ChildBatchWriter,
    EventRowWriter,
    GeneratedKeyResolver,
    exception_rows,
    property_rows,
)

logger = logging.getLogger(__name__)


class AppendState(str, Enum):
    """Last step reached by sub_append; any exception aborts from there."""

    IDLE = "idle"
    PARENT_WRITTEN = "parent_written"
    KEY_RESOLVED = "key_resolved"
    PROPERTIES_WRITTEN = "properties_written"
    EXCEPTIONS_WRITTEN = "exceptions_written"


@dataclass
class AppendResult:
    """Outcome of a successful append."""

    event_id: int
    reference_mask: int
    update_count: int
    property_count: int = 0
    exception_count: int = 0
    state: AppendState = AppendState.EXCEPTIONS_WRITTEN


class DBAppender:
    """
    Writes logging events through a DB-API connection.

    Capabilities are resolved by the caller once and passed in; the appender
    holds no per-event state and may be reused for any number of events,
    one at a time per connection.
    """

    def __init__(
        self,
        capabilities: DriverCapabilities,
        row_count_policy: RowCountPolicy = RowCountPolicy.WARN,
    ):
        self.capabilities = capabilities
        self.event_writer = EventRowWriter(capabilities.paramstyle, row_count_policy)
        self.key_resolver = GeneratedKeyResolver(capabilities)
        self.property_writer = ChildBatchWriter(
            "property",
            insert_properties_sql(capabilities.paramstyle),
            capabilities.supports_batch_updates,
        )
        self.exception_writer = ChildBatchWriter(
            "exception",
            insert_exception_sql(capabilities.paramstyle),
            capabilities.supports_batch_updates,
        )

    @property
    def insert_sql(self) -> str:
        """SQL the parent insert cursor is expected to run."""
        return self.event_writer.insert_sql

    def append(self, event: LoggingEventRecord, connection: Any) -> AppendResult:
        """Open the parent insert cursor, write the event, close the cursor."""
        with closing(connection.cursor()) as insert_cursor:
            return self.sub_append(event, connection, insert_cursor)

    def sub_append(
        self, event: LoggingEventRecord, connection: Any, insert_cursor: Any
    ) -> AppendResult:
        """
        Write one event using a caller-provided cursor for the parent insert.

        - Insert the event row (row count != 1 warns or aborts per policy)
        - Resolve the generated event id
        - Merge context and event properties, insert property rows
        - Insert exception rows when the event carries a throwable

        WriteError and KeyResolutionError propagate; earlier inserts are not
        undone here.
        """
        state = AppendState.IDLE
        try:
            update_count = self.event_writer.write(insert_cursor, event)
            state = AppendState.PARENT_WRITTEN

            event_id = self.key_resolver.resolve(insert_cursor, connection)
            state = AppendState.KEY_RESOLVED

            merged = merge_property_maps(event.context_properties, event.event_properties)
            property_count = self.property_writer.write(connection, property_rows(event_id, merged))
            state = AppendState.PROPERTIES_WRITTEN

            exception_count = 0
            if event.throwable is not None:
                exception_count = self.exception_writer.write(
                    connection, exception_rows(event_id, event.throwable)
                )
            state = AppendState.EXCEPTIONS_WRITTEN
        except Exception:
            logger.debug("Append aborted after state %s", state.value)
            raise

        return AppendResult(
            event_id=event_id,
            reference_mask=compute_reference_mask(event),
            update_count=update_count,
            property_count=property_count,
            exception_count=exception_count,
            state=state,
        )


class EventWriteUnit:
    """
    An appender bound to one connection, callable once per event.

        unit = EventWriteUnit(appender, conn)
        with transaction(conn):
            unit(event)
    """

    def __init__(self, appender: DBAppender, connection: Any):
        self.appender = appender
        self.connection = connection

    def __call__(self, event: LoggingEventRecord) -> AppendResult:
        return self.appender.append(event, self.connection)


@contextmanager
def transaction(connection: Any) -> Iterator[Any]:
    """Commit on success, roll back and re-raise on any exception."""
    try:
        yield connection
    except Exception:
        try:
            connection.rollback()
        except Exception as e:
            logger.warning("Rollback failed: %s", e)
        raise
    else:
        connection.commit()
