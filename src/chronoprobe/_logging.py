"""Structured JSON log formatter and logging configuration.

chronoprobe logs through the standard :mod:`logging` module; each module
owns a ``logging.getLogger(__name__)`` logger and never configures
handlers itself.  Applications (and the ``chronoprobe`` CLI) call
:func:`configure_logging` once at startup.

:class:`JsonFormatter` emits one JSON object per record (NDJSON).  When
a record carries calibration fields passed via ``extra=`` (as
:func:`~chronoprobe.calibrate` does), they are copied into the output
so log aggregators can filter on them without parsing the message.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Any

from chronoprobe._settings import LoggingSettings

_MEGABYTE = 1024 * 1024

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_CONTEXT_FIELDS = ("api", "resolution", "cost", "max_no_updates", "samples")


class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects.

    Fields:

    - ``timestamp``: ISO 8601, UTC
    - ``level`` / ``logger`` / ``message``
    - ``service``: application name
    - ``version``: omitted when empty
    - any of ``api``, ``resolution``, ``cost``, ``max_no_updates``,
      ``samples`` present on the record
    - ``exception`` / ``stack_info``: only when present

    Args:
        service: Application name included in every line.
        version: Application version string.
    """

    def __init__(
        self,
        *,
        service: str = "",
        version: str = "",
    ) -> None:
        super().__init__()
        self._service = service
        self._version = version

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self._service,
        }

        if self._version:
            entry["version"] = self._version

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


def configure_logging(
    settings: LoggingSettings,
    *,
    service: str,
    version: str = "",
) -> None:
    """Configure the root logger from settings.

    Replaces any handlers already on the root logger with a stderr
    :class:`~logging.StreamHandler` and, when ``settings.file`` is set,
    a :class:`~logging.handlers.RotatingFileHandler` rotating at
    ``settings.max_file_size_mb``.

    Args:
        settings: Level, format and file sink.
        service: Application name for :class:`JsonFormatter`.
        version: Application version for :class:`JsonFormatter`.
    """
    root = logging.getLogger()

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if settings.format == "json":
        formatter: logging.Formatter = JsonFormatter(service=service, version=version)
    else:
        formatter = logging.Formatter(_TEXT_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if settings.file is not None:
        file_handler = RotatingFileHandler(
            settings.file,
            maxBytes=settings.max_file_size_mb * _MEGABYTE,
            backupCount=settings.backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(settings.level)
