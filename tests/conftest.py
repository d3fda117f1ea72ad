"""
Shared fixtures: SQLite schema for the three logging tables and event builders.
"""

import sqlite3

import pytest

from logstore.events import CallerFrame, LoggingEventRecord

SCHEMA = """
CREATE TABLE logging_event (
    timestmp BIGINT NOT NULL,
    formatted_message TEXT NOT NULL,
    logger_name VARCHAR(254) NOT NULL,
    level_string VARCHAR(254) NOT NULL,
    thread_name VARCHAR(254),
    reference_flag SMALLINT,
    caller_filename VARCHAR(254),
    caller_class VARCHAR(254),
    caller_method VARCHAR(254),
    caller_line CHAR(4),
    event_id INTEGER PRIMARY KEY AUTOINCREMENT
);

CREATE TABLE logging_event_property (
    event_id BIGINT NOT NULL,
    mapped_key VARCHAR(254) NOT NULL,
    mapped_value TEXT,
    PRIMARY KEY (event_id, mapped_key),
    FOREIGN KEY (event_id) REFERENCES logging_event(event_id)
);

CREATE TABLE logging_event_exception (
    event_id BIGINT NOT NULL,
    i SMALLINT NOT NULL,
    trace_line VARCHAR(254) NOT NULL,
    PRIMARY KEY (event_id, i),
    FOREIGN KEY (event_id) REFERENCES logging_event(event_id)
);
"""


@pytest.fixture
def sqlite_conn():
    """In-memory SQLite connection with the logging schema."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(SCHEMA)
    yield conn
    conn.close()


@pytest.fixture
def sqlite_db_path(tmp_path):
    """SQLite database file with the logging schema."""
    path = tmp_path / "logging.db"
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA)
    conn.close()
    return path


@pytest.fixture
def make_event():
    """Factory for LoggingEventRecord with sensible defaults."""

    def _make(**overrides):
        fields = {
            "timestamp": 1700000000123,
            "formatted_message": "boom",
            "logger_name": "com.x.Y",
            "level": "ERROR",
            "thread_name": "main",
        }
        fields.update(overrides)
        return LoggingEventRecord(**fields)

    return _make


@pytest.fixture
def caller():
    return CallerFrame(
        file_name="orders.py",
        class_name="orders",
        method_name="checkout",
        line_number=42,
    )
