"""Structured Logging — formatters and setup for the speki logger tree.

Invariants:
    - Only the "speki" logger tree is configured; library loggers are left alone
    - Transition and store extras (card_id, transition, error_code, ...) appear in
      both formats whenever a log call supplies them
    - json: one object per line; text: the message followed by key=value pairs

Design Decisions:
    - stdlib logging carries extras on the record, so no logging library is needed
    - setup_logging called once on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

CARD_FIELDS = (
    "card_id", "transition", "error_code", "attribute_id", "class_id", "resource", "path",
)


def card_extras(record: logging.LogRecord) -> dict:
    """The domain extras present on a record, in CARD_FIELDS order."""
    return {
        key: record.__dict__[key]
        for key in CARD_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **card_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class CardTextFormatter(logging.Formatter):
    """Human-readable lines for development, e.g. `... Transition ok card_id=… transition=ii`."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = " ".join(f"{k}={v}" for k, v in card_extras(record).items())
        if not extras:
            return line
        head, sep, trace = line.partition("\n")
        return f"{head} {extras}{sep}{trace}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure the speki logger tree. Safe to call more than once."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else CardTextFormatter())
    root = logging.getLogger("speki")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
