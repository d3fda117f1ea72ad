"""
logging.Handler that persists records through DBAppender.

This is the boundary where write failures are contained: emit() never lets
an exception reach the code that called logger.info() and friends.
"""

import logging
import threading
from typing import Any, Callable, Mapping, Optional

from .config import Config, config
from .events import LoggingEventRecord
from .storage.capabilities import DriverCapabilities
from .storage.db_appender import DBAppender, transaction

_OWN_LOGGER_PREFIX = "logstore"


class DBHandler(logging.Handler):
    """
    Logging handler writing each record to the logging_event tables.

    A new connection is requested from connection_factory for every record
    and closed afterwards. Driver capabilities are detected from the first
    connection unless passed in, then kept for the handler's lifetime.
    """

    def __init__(
        self,
        connection_factory: Callable[[], Any],
        capabilities: Optional[DriverCapabilities] = None,
        context_properties: Optional[Mapping[str, str]] = None,
        settings: Optional[Config] = None,
        level: int = logging.NOTSET,
    ):
        super().__init__(level)
        self.connection_factory = connection_factory
        self.settings = settings or config
        self.context_properties = dict(context_properties or {})
        self._appender: Optional[DBAppender] = None
        if capabilities is not None:
            self._appender = DBAppender(capabilities, self.settings.row_count_policy)
        self._local = threading.local()

    def _get_appender(self, connection: Any) -> DBAppender:
        if self._appender is None:
            capabilities = DriverCapabilities.detect(
                connection,
                dialect=self.settings.dialect,
                **self.settings.capability_overrides(),
            )
            self._appender = DBAppender(capabilities, self.settings.row_count_policy)
        return self._appender

    def _is_own_record(self, record: logging.LogRecord) -> bool:
        name = record.name
        return name == _OWN_LOGGER_PREFIX or name.startswith(_OWN_LOGGER_PREFIX + ".")

    def emit(self, record: logging.LogRecord) -> None:
        # Diagnostics from the write path itself would recurse into this handler
        if self._is_own_record(record) or getattr(self._local, "emitting", False):
            return

        self._local.emitting = True
        try:
            event = LoggingEventRecord.from_log_record(record, self.context_properties)
            connection = self.connection_factory()
            try:
                appender = self._get_appender(connection)
                if self.settings.use_transactions:
                    with transaction(connection):
                        appender.append(event, connection)
                else:
                    try:
                        appender.append(event, connection)
                    finally:
                        # Without a transaction, whatever was inserted is kept
                        connection.commit()
            finally:
                connection.close()
        except Exception:
            self.handleError(record)
        finally:
            self._local.emitting = False
