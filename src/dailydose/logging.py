"""JSONL event logging for observability."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .quotes.models import Quote


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    operation: str | None = None
    quote_id: int | None = None
    quote_text: str | None = None
    message: str | None = None
    error_kind: str | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class JSONLLogger:
    """Logger that writes structured quote events in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "events.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".dailydose" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file."""
        self._rotate_if_needed()

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

    def log(
        self,
        event: str,
        *,
        operation: str | None = None,
        quote: Quote | None = None,
        message: str | None = None,
        error_kind: str | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            operation=operation,
            quote_id=quote.id if quote else None,
            quote_text=quote.text if quote else None,
            message=message,
            error_kind=error_kind,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_fetch(self, success: bool, *, quote: Quote | None = None, error: str | None = None) -> None:
        """Log the outcome of a remote fetch."""
        self.log(
            "fetch_success" if success else "fetch_failure",
            quote=quote,
            error=error if not success else None,
        )

    def log_displayed(self, operation: str, quote: Quote, message: str | None = None) -> None:
        """Log a quote becoming the current quote."""
        self.log("quote_displayed", operation=operation, quote=quote, message=message)

    def log_failed(self, operation: str, error_kind: str, message: str | None) -> None:
        """Log an operation ending without a quote to show."""
        self.log("load_failed", operation=operation, error_kind=error_kind, message=message)


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Create an event logger writing to ``log_dir``."""
    return JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
