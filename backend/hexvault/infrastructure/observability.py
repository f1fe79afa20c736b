"""Structured Logging — JSON formatter and setup for the vault service.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, path, operation, column, match_count) surfaced when present
    - Logs go to the terminal and, when configured, are appended to a log file

Design Decisions:
    - setup_logging called on startup via lifespan; it replaces its own earlier handlers
      and returns the service logger, which is injected into repositories
      instead of being looked up globally
"""

import logging
import json
from datetime import datetime, timezone

SERVICE_LOGGER_NAME = "hexvault.vault"

_EXTRA_FIELDS = ("error_code", "path", "operation", "column", "match_count")

# Root handlers installed by the last setup_logging call
_installed_handlers: list[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def _build_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")


def setup_logging(
    level: str = "INFO", fmt: str = "json", log_file: str | None = None,
) -> logging.Logger:
    """Configure logging for the application and return the service logger.

    Handlers from a previous call are removed and closed first, so repeated
    setup (app restarts in one process) never duplicates log lines.
    """
    for handler in _installed_handlers:
        logging.root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    formatter = _build_formatter(fmt)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logging.root.addHandler(handler)
        _installed_handlers.append(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logging.getLogger(SERVICE_LOGGER_NAME)
