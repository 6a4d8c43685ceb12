"""Structured logging setup.

Supports two modes:
  - ENV=prod → JSON structured logging (machine-parseable)
  - ENV!=prod → Human-readable plaintext (developer friendly)

Log lines carry intent=... and scope=... fields by convention; the JSON
formatter lifts them into their own keys for correlation.
"""
import json
import logging
import re
import sys
from typing import Optional

from config.settings import get_settings

_FIELD_PATTERNS = {
    "intent_id": re.compile(r"intent=(\S+)"),
    "scope_id": re.compile(r"scope=(\S+)"),
}


class JSONFormatter(logging.Formatter):
    """JSON structured formatter for production — machine-parseable."""

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        log_entry = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": msg,
        }
        for key, pattern in _FIELD_PATTERNS.items():
            m = pattern.search(msg)
            if m:
                log_entry[key] = m.group(1)

        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logger — JSON in prod, plaintext in dev."""
    settings = get_settings()
    log_level = level or settings.LOG_LEVEL

    if settings.ENV == "prod":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("motor").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
