"""
Logging event model consumed by the storage layer.

The storage layer treats a LoggingEventRecord as an opaque, pre-built value.
from_log_record() is the bridge from the standard library logging module.
"""

import logging
import traceback
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

# Attribute read from a LogRecord for event-scope properties,
# i.e. logger.info("...", extra={"properties": {"req": "42"}})
EVENT_PROPERTIES_ATTR = "properties"

_UNKNOWN_FILE = "(unknown file)"
_UNKNOWN_FUNCTION = "(unknown function)"


@dataclass(frozen=True)
class CallerFrame:
    """One frame of caller data."""

    file_name: str
    class_name: str
    method_name: str
    line_number: int


@dataclass(frozen=True)
class LoggingEventRecord:
    """A fully formatted logging event, ready to be persisted."""

    timestamp: int
    formatted_message: str
    logger_name: str
    level: str
    thread_name: str
    caller_data: Sequence[Optional[CallerFrame]] = ()
    throwable: Optional[Sequence[str]] = None
    context_properties: Optional[Mapping[str, str]] = None
    event_properties: Optional[Mapping[str, str]] = None

    @property
    def first_caller(self) -> Optional[CallerFrame]:
        """Only the first caller frame is ever persisted."""
        if not self.caller_data:
            return None
        return self.caller_data[0]

    @property
    def has_caller_data(self) -> bool:
        """
        True if any frame is non-null, even when the first one is None.

        The reference flag follows this, so a row can carry CALLER_DATA_EXISTS
        while its caller columns are NULL (only first_caller is written).
        """
        return any(frame is not None for frame in self.caller_data)

    @property
    def has_throwable(self) -> bool:
        return self.throwable is not None

    @classmethod
    def from_log_record(
        cls,
        record: logging.LogRecord,
        context_properties: Optional[Mapping[str, str]] = None,
    ) -> "LoggingEventRecord":
        """
        Build an event from a standard library LogRecord.

        - timestamp: record.created in epoch millis
        - caller data: a single frame built from filename/module/funcName/lineno,
          omitted when the logging module could not find the caller
        - throwable: formatted exc_info split into lines, falling back to exc_text
        - event-scope properties: the "properties" attribute passed via extra
        """
        return cls(
            timestamp=int(record.created * 1000),
            formatted_message=record.getMessage(),
            logger_name=record.name,
            level=record.levelname,
            thread_name=record.threadName or "",
            caller_data=_caller_data(record),
            throwable=_throwable_lines(record),
            context_properties=_stringify(context_properties),
            event_properties=_stringify(getattr(record, EVENT_PROPERTIES_ATTR, None)),
        )


def _caller_data(record: logging.LogRecord) -> Tuple[CallerFrame, ...]:
    if not record.funcName or record.funcName == _UNKNOWN_FUNCTION:
        return ()
    if record.pathname == _UNKNOWN_FILE:
        return ()
    return (
        CallerFrame(
            file_name=record.filename,
            class_name=record.module,
            method_name=record.funcName,
            line_number=record.lineno,
        ),
    )


def _throwable_lines(record: logging.LogRecord) -> Optional[Tuple[str, ...]]:
    if record.exc_info and record.exc_info[0] is not None:
        text = "".join(traceback.format_exception(*record.exc_info))
    elif record.exc_text:
        text = record.exc_text
    else:
        return None
    return tuple(text.splitlines())


def _stringify(properties: Optional[Mapping]) -> Optional[Dict[str, str]]:
    if properties is None:
        return None
    return {str(key): str(value) for key, value in properties.items()}
