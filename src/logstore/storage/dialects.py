"""
Vendor specifics needed by the write path: the query that returns the last
inserted event id, and whether cursor.lastrowid can be trusted.
"""

import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import ConfigurationError


@dataclass(frozen=True)
class Dialect:
    name: str
    select_insert_id_sql: str
    lastrowid_reliable: bool


DIALECTS: Dict[str, Dialect] = {
    d.name: d
    for d in (
        Dialect("sqlite", "SELECT last_insert_rowid()", True),
        Dialect("mysql", "SELECT LAST_INSERT_ID()", True),
        # lastrowid is the row OID on PostgreSQL, not the serial value
        Dialect("postgres", "SELECT currval('logging_event_id_seq')", False),
        Dialect("oracle", "SELECT logging_event_id_seq.currval FROM dual", False),
        Dialect("mssql", "SELECT @@identity id", False),
        Dialect("hsql", "CALL IDENTITY()", False),
        Dialect("sybase", "SELECT @@identity", False),
    )
}

# Top-level driver module -> dialect name
DRIVER_DIALECTS: Dict[str, str] = {
    "sqlite3": "sqlite",
    "pysqlite2": "sqlite",
    "psycopg": "postgres",
    "psycopg2": "postgres",
    "pg8000": "postgres",
    "pymysql": "mysql",
    "MySQLdb": "mysql",
    "mysql": "mysql",
    "oracledb": "oracle",
    "cx_Oracle": "oracle",
    "pymssql": "mssql",
    "pyodbc": "mssql",
}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name (case-insensitive)."""
    try:
        return DIALECTS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(DIALECTS))
        raise ConfigurationError(f"Unknown SQL dialect {name!r} (known: {known})") from None


def driver_module_name(connection: Any) -> str:
    """Name of the top-level module that defines the connection's class."""
    return type(connection).__module__.split(".")[0]


def detect_dialect(connection: Any) -> Optional[Dialect]:
    """Dialect for a DB-API connection, or None if the driver is not known."""
    name = DRIVER_DIALECTS.get(driver_module_name(connection))
    return DIALECTS[name] if name else None


def driver_paramstyle(connection: Any, default: str = "qmark") -> str:
    """
    The DB-API paramstyle declared by the connection's driver.

    Looks from the most specific module outwards, so mysql.connector.connection
    finds mysql.connector.paramstyle even though "mysql" is a bare namespace.
    """
    parts = type(connection).__module__.split(".")
    for end in range(len(parts), 0, -1):
        module = sys.modules.get(".".join(parts[:end]))
        paramstyle = getattr(module, "paramstyle", None)
        if paramstyle:
            return paramstyle
    return default
