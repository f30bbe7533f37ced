"""
JSONL logging bootstrap and the TRACE level used for resolution diagnostics.
Initializes a single JSONL sink early in CLI startup.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

DEFAULT_PATH = os.environ.get("COMMONJS_RESOLVER_LOG_PATH", "./commonjs-resolver.log.jsonl")
DEFAULT_LEVEL = os.environ.get("COMMONJS_RESOLVER_LOG_LEVEL", "INFO").upper()

# LogRecord attributes that are not worth repeating in every JSON line
_RECORD_ATTRS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
    }
)


def level_from_name(level: str | None) -> int:
    """Map a level name (including TRACE) to its numeric value."""
    name = (level or DEFAULT_LEVEL).upper()
    if name == "TRACE":
        return TRACE
    return getattr(logging, name, logging.INFO)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        base = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "commonjs-resolver.log", "ver": "1.0.0"},
            "logger": record.name,
            "message": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k in _RECORD_ATTRS:
                continue
            base.setdefault(k, v)
        return base

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> None:
    path = path or DEFAULT_PATH
    root = logging.getLogger()
    root.setLevel(level_from_name(level))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
    root.addHandler(JsonlHandler(path))
