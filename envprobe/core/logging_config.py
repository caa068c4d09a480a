"""JSON logging shared by the probe app and the mock station.

Records also land in a small ring buffer so the map page can show recent
activity (``GET /api/logs``) without shipping logs anywhere.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_BUFFER_SIZE = 200

_CONFIGURED = False
_LOG_BUFFER: deque[dict[str, str]] = deque(maxlen=LOG_BUFFER_SIZE)


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


class _BufferHandler(logging.Handler):
    """Keeps the newest records first, rendered to plain strings."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "time": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
                "level": record.levelname,
                "name": record.name,
                "service": getattr(record, "service", ""),
                "message": record.getMessage(),
            }
        except Exception:
            self.handleError(record)
            return
        _LOG_BUFFER.appendleft(entry)


def setup_logging(service_name: str = "envprobe", level: Optional[str] = None) -> None:
    """Install the JSON handler and the buffer on the root logger, once per process."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    service_filter = _ServiceNameFilter(service_name)
    stream = logging.StreamHandler()
    stream.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(service)s %(message)s"))
    stream.addFilter(service_filter)
    buffer = _BufferHandler()
    buffer.addFilter(service_filter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stream)
    root.addHandler(buffer)
    root.setLevel((level or "INFO").upper())
    _CONFIGURED = True


def get_log_buffer(limit: int = 100, level: Optional[str] = None) -> list[dict[str, str]]:
    """Newest buffered records first, optionally only those at ``level``."""

    entries = list(_LOG_BUFFER)
    if level:
        entries = [entry for entry in entries if entry["level"] == level.upper()]
    return entries[:limit]


__all__ = ["LOG_BUFFER_SIZE", "setup_logging", "get_log_buffer"]
