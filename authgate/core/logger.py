from __future__ import annotations

import json
import logging
import sys
from typing import Any

from authgate.core.config import settings

# Fields every login flow log line carries; promoted to top-level JSON keys.
FLOW_FIELDS = ("strategy", "reason")

_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line.

    Keys passed through `extra=` land under "extra", except the flow fields,
    which sit next to "message" so log pipelines can filter on them directly.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in FLOW_FIELDS:
            if field in record.__dict__:
                payload[field] = record.__dict__[field]
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if not key.startswith("_") and key not in payload and key not in _RESERVED_ATTRS
        }
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def init_logging(level: int | None = None) -> None:
    if logging.getLogger().handlers:
        return
    effective_level = level or getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_FORMAT.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.setLevel(effective_level)
    root.addHandler(handler)
