"""Configuration loaded from environment variables.

Values come from the process environment, which the entry point populates
from a ``.env`` file when one is found.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .quotes.source import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".dailydose"


@dataclass
class DailyDoseConfig:
    """Configuration for DailyDose.

    Attributes:
        db_path: SQLite database file for stored quotes.
        api_base_url: Base URL of the quote API; ``today`` is appended.
        http_timeout: Timeout in seconds for the remote fetch.
        log_dir: Directory for the JSONL event log.
    """

    db_path: Path | None = None
    api_base_url: str = DEFAULT_BASE_URL
    http_timeout: float = 10.0
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate config and set defaults."""
        if self.db_path is None:
            self.db_path = DEFAULT_HOME / "quotes.db"

        if self.log_dir is None:
            self.log_dir = DEFAULT_HOME / "logs"

        if not self.api_base_url.endswith("/"):
            self.api_base_url += "/"

        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be positive")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive, using %s", name, default)
        return default
    return value


def _path_env(name: str) -> Path | None:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else None


def config_from_env() -> DailyDoseConfig:
    """Load configuration from environment variables."""
    return DailyDoseConfig(
        db_path=_path_env("DAILYDOSE_DB_PATH"),
        api_base_url=os.getenv("DAILYDOSE_API_BASE_URL", DEFAULT_BASE_URL),
        http_timeout=_float_env("DAILYDOSE_HTTP_TIMEOUT", 10.0),
        log_dir=_path_env("DAILYDOSE_LOG_DIR"),
    )
