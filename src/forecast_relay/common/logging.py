"""Structured JSON logging for Forecast-Relay."""

import logging
import json
import sys
from datetime import datetime, timezone

# Extra attributes copied into the JSON line when a caller passes them.
_EXTRA_FIELDS = ("sink", "ok", "status_code")


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application."""
    root = logging.getLogger("forecast_relay")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.propagate = False
    # create_app may run more than once per process (tests, reload)
    if any(isinstance(h.formatter, JSONFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger scoped under forecast_relay."""
    return logging.getLogger(f"forecast_relay.{name}")
