"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Domain extras (date_iso, source, error_code, level_index, attempt, path)
      are surfaced as top-level JSON keys when a call passes them via extra=
    - setup_logging is idempotent: calling it again replaces its own handler
      instead of stacking a second one

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - setup_logging called once on startup via lifespan; tests never call it,
      so pytest's caplog sees plain records
"""

import logging
import json
from datetime import datetime, timezone

DOMAIN_EXTRA_FIELDS = (
    "date_iso", "source", "error_code", "level_index", "attempt", "path",
)

_HANDLER_NAME = "dailypath"


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in DOMAIN_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo is noise at INFO; the store logs its own failures
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
