"""
Driver capability descriptor, resolved once per connection source.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from ..errors import ConfigurationError
from .dialects import detect_dialect, driver_module_name, driver_paramstyle, get_dialect
from .sql import PARAMSTYLES

logger = logging.getLogger(__name__)

GENERATED_KEYS = "generated_keys"
SELECT_INSERT_ID = "select_insert_id"


@dataclass(frozen=True)
class DriverCapabilities:
    """
    What the driver behind a connection can do.

    Immutable: built once at initialization time and handed to the writers,
    never probed again per event.
    """

    supports_batch_updates: bool = True
    supports_generated_keys: bool = False
    select_insert_id_sql: Optional[str] = None
    paramstyle: str = "qmark"
    dialect: Optional[str] = None

    def __post_init__(self):
        if self.paramstyle not in PARAMSTYLES:
            raise ConfigurationError(f"Unsupported paramstyle: {self.paramstyle!r}")
        if not self.supports_generated_keys and not self.select_insert_id_sql:
            raise ConfigurationError(
                "Driver has no generated key support and no select-insert-id query; "
                "event ids cannot be resolved"
            )

    @property
    def key_strategy(self) -> str:
        return GENERATED_KEYS if self.supports_generated_keys else SELECT_INSERT_ID

    @classmethod
    def for_dialect(cls, name: str, **overrides: Any) -> "DriverCapabilities":
        """Capabilities for a known dialect, with optional field overrides."""
        dialect = get_dialect(name)
        capabilities = cls(
            supports_generated_keys=dialect.lastrowid_reliable,
            select_insert_id_sql=dialect.select_insert_id_sql,
            dialect=dialect.name,
        )
        return replace(capabilities, **overrides)

    @classmethod
    def detect(
        cls, connection: Any, dialect: Optional[str] = None, **overrides: Any
    ) -> "DriverCapabilities":
        """
        Resolve capabilities from a live DB-API connection.

        - dialect: explicit name, otherwise detected from the driver module
        - paramstyle: taken from the driver module unless overridden
        - unknown drivers need select_insert_id_sql or supports_generated_keys
          in overrides
        """
        overrides.setdefault("paramstyle", driver_paramstyle(connection))
        if dialect:
            capabilities = cls.for_dialect(dialect, **overrides)
        else:
            detected = detect_dialect(connection)
            if detected is not None:
                capabilities = cls.for_dialect(detected.name, **overrides)
            else:
                try:
                    capabilities = cls(**overrides)
                except ConfigurationError as e:
                    raise ConfigurationError(
                        f"Cannot detect SQL dialect for driver {driver_module_name(connection)!r}: {e}"
                    ) from None

        logger.debug(
            "Resolved driver capabilities: dialect=%s key_strategy=%s batch_updates=%s paramstyle=%s",
            capabilities.dialect,
            capabilities.key_strategy,
            capabilities.supports_batch_updates,
            capabilities.paramstyle,
        )
        return capabilities
