"""JSON log formatting for rawport.

One JSON object per line, suitable for shipping batch logs to a collector.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rawport.logging.context import CONTEXT_FIELDS

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName", "job_tag", *CONTEXT_FIELDS}


class JSONFormatter(logging.Formatter):
    """Render a record as ``{"timestamp", "level", "logger", "message", ...}``.

    Job context set by JobContextFilter and attributes passed via ``extra``
    are grouped under ``"context"``. Tracebacks go in ``"exception"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        context = self._context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)

    @staticmethod
    def _context(record: logging.LogRecord) -> dict[str, Any]:
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED and not key.startswith("_")
        }
        # Read last so extra={"job_id": ...} cannot shadow the real job
        context.update(
            (name, getattr(record, name))
            for name in CONTEXT_FIELDS
            if getattr(record, name, None)
        )
        return context
