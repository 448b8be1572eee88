"""JSON logging for the redirector process.

Every record (ours and uvicorn's) goes to stdout as one JSON object. The root
level comes from ``LOG_LEVEL`` at startup and is then maintained by
:class:`drive_redirector.log_level.LogLevelWatcher`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from drive_redirector.log_level import ACCESS_LOGGER, DEFAULT_LEVEL, apply_level, resolve_level

# Attributes every LogRecord carries; anything else arrived via ``extra=``.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "color_message",
}

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", ACCESS_LOGGER)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(log_level: str | None = None) -> int:
    """Install the JSON handler on the root logger and apply ``log_level``.

    ``log_level`` is a ``LOG_LEVEL`` value (``DEBUG``, ``INFO``, ``WARN``,
    ``ERROR`` or ``OFF``). Unset or unrecognized values fall back to DEBUG.
    Returns the level that was applied.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    # uvicorn ships its own handlers; send its records through ours instead.
    for name in _UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True

    level = resolve_level(log_level)
    if level is None:
        level = DEFAULT_LEVEL
    apply_level(level)
    return level
