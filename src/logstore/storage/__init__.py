"""
Storage layer for logstore.
"""

from .capabilities import DriverCapabilities
from .db_appender import AppendResult, AppendState, DBAppender, EventWriteUnit, transaction
from .helpers import (
    CALLER_DATA_EXISTS,
    EXCEPTION_EXISTS,
    PROPERTIES_EXIST,
    compute_reference_mask,
    merge_property_maps,
)

__all__ = [
    "DriverCapabilities",
    "AppendResult",
    "AppendState",
    "DBAppender",
    "EventWriteUnit",
    "transaction",
    "CALLER_DATA_EXISTS",
    "EXCEPTION_EXISTS",
    "PROPERTIES_EXIST",
    "compute_reference_mask",
    "merge_property_maps",
]
