"""Application logging setup.

``setup_logging`` is called once from the FastAPI lifespan; modules obtain
namespaced loggers through ``get_logger``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from fieldaudit.config import settings

_ROOT_NAME = "fieldaudit"


class JSONFormatter(logging.Formatter):
    """One JSON object per log line, for production log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "audit_id"):
            entry["audit_id"] = record.audit_id
        if hasattr(record, "duration_ms"):
            entry["duration_ms"] = record.duration_ms
        return json.dumps(entry)


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    level = (level or settings.LOG_LEVEL).upper()
    json_output = settings.LOG_JSON if json_output is None else json_output

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
        )

    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(getattr(logging, level, logging.INFO))
    root.handlers = [handler]
    root.propagate = False

    for noisy in ("uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
