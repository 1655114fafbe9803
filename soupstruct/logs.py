"""
Structured JSON logging for soupstruct.

The library only logs through module loggers; call setup() from an
application to get JSON lines on stdout.
"""

import json
import logging
import sys
from datetime import datetime, timezone


METADATA_FIELDS = ("record", "field", "selector", "matches", "url", "error_code")


class JsonFormatter(logging.Formatter):
    """Format logs as structured JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in METADATA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup(level=logging.INFO, stream=None, **defaults) -> logging.LoggerAdapter:
    """
    Route all logging through a JSON handler and return an adapter that
    stamps `defaults` on every record it emits.

    Example:
        log = setup(logging.DEBUG, url=url)
        log.info("decoding page")
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    return logging.LoggerAdapter(root, defaults or {})
