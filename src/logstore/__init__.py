"""
logstore: persist structured logging events into a relational database.
"""

from .config import Config, RowCountPolicy, config
from .errors import (
    ConfigurationError,
    KeyResolutionError,
    LogStoreError,
    SoftIntegrityWarning,
    WriteError,
)
from .events import CallerFrame, LoggingEventRecord
from .handler import DBHandler
from .storage import AppendResult, DBAppender, DriverCapabilities, EventWriteUnit, transaction

__version__ = "0.1.0"

__all__ = [
    "Config",
    "RowCountPolicy",
    "config",
    "ConfigurationError",
    "KeyResolutionError",
    "LogStoreError",
    "SoftIntegrityWarning",
    "WriteError",
    "CallerFrame",
    "LoggingEventRecord",
    "DBHandler",
    "AppendResult",
    "DBAppender",
    "DriverCapabilities",
    "EventWriteUnit",
    "transaction",
]
