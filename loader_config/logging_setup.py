"""
JSONL logging bootstrap.

Every record becomes one JSON object per line. Structured fields passed
through ``extra=`` (for example the ``module.resolve`` events ConfigStore
emits when ``explainResolutions`` is on) are written as top-level keys.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path
from typing import Any

DEFAULT_PATH = os.environ.get("LOADER_CONFIG_LOG_PATH", "./loader-config.log.jsonl")
DEFAULT_LEVEL = os.environ.get("LOADER_CONFIG_LOG_LEVEL", "INFO").upper()

SCHEMA = {"name": "loader-config.log", "ver": "1.1.0"}

# Attributes every LogRecord carries; anything else came in through ``extra=``
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields a caller attached to a record via ``extra=``."""
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


def record_to_payload(record: logging.LogRecord) -> dict[str, Any]:
    """Build the JSON object written for one log record."""
    extras = record_extras(record)
    payload: dict[str, Any] = {
        "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
        "lvl": record.levelname,
        "schema": SCHEMA,
        "logger": record.name,
        "event": extras.pop("event", None),
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc"] = logging.Formatter().formatException(record.exc_info)
    for key, value in extras.items():
        payload.setdefault(key, value)
    return payload


class JsonlHandler(logging.Handler):
    """Append log records to a JSONL file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(record_to_payload(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> JsonlHandler:
    """Install the JSONL sink on the root logger, replacing any earlier one."""
    level_name = (level or DEFAULT_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    handler = JsonlHandler(path or DEFAULT_PATH)
    root.addHandler(handler)
    return handler
