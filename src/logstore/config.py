"""
Configuration management for logstore.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigurationError


class RowCountPolicy(str, Enum):
    """What to do when the event insert does not report exactly one row."""

    WARN = "warn"
    ABORT = "abort"


@dataclass
class Config:
    """Main configuration class."""

    # SQLite database used by the CLI
    db_path: Path = Path("logstore.db")

    # Driver capabilities; None means detect from the connection
    dialect: Optional[str] = None
    batch_updates: Optional[bool] = None
    generated_keys: Optional[bool] = None

    # Write path behavior
    row_count_policy: RowCountPolicy = RowCountPolicy.WARN
    use_transactions: bool = True

    def __post_init__(self):
        """Normalize values that may arrive as strings."""
        self.db_path = Path(self.db_path)
        policy = self.row_count_policy
        if isinstance(policy, str):
            policy = policy.strip().lower()
        try:
            self.row_count_policy = RowCountPolicy(policy)
        except ValueError:
            choices = ", ".join(p.value for p in RowCountPolicy)
            raise ConfigurationError(
                f"Invalid row count policy {self.row_count_policy!r} (expected one of: {choices})"
            )

    def capability_overrides(self) -> Dict[str, Any]:
        """Keyword overrides for DriverCapabilities.detect()/for_dialect()."""
        overrides: Dict[str, Any] = {}
        if self.batch_updates is not None:
            overrides["supports_batch_updates"] = self.batch_updates
        if self.generated_keys is not None:
            overrides["supports_generated_keys"] = self.generated_keys
        return overrides

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        return cls(
            db_path=Path(os.getenv("LOGSTORE_DB_PATH", "logstore.db")),
            dialect=os.getenv("LOGSTORE_DIALECT") or None,
            batch_updates=_env_bool("LOGSTORE_BATCH_UPDATES"),
            generated_keys=_env_bool("LOGSTORE_GENERATED_KEYS"),
            row_count_policy=os.getenv("LOGSTORE_ROW_COUNT_POLICY", RowCountPolicy.WARN.value),
            use_transactions=_env_bool("LOGSTORE_USE_TRANSACTIONS", True),
        )


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


# Global config instance
config = Config.from_env()
