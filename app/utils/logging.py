"""
Logging Configuration

Configures the standard library logging module once, at startup.

Two output formats, selected by LOG_FORMAT:
- text: "2024-01-15 10:30:00,123 - app.routers.books - ERROR - ..."
- json: one JSON object per line, for log shippers

Modules never configure handlers themselves; they only do:

    logger = logging.getLogger(__name__)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from app.config import Settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """
    Render each record as a single-line JSON object.

    Fields: timestamp (UTC, ISO 8601), level, logger, message, location,
    and exception when the record carries exc_info.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.filename}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(settings: Settings) -> None:
    """
    Install the root handler for the configured level and format.

    force=True replaces handlers installed earlier (e.g. by uvicorn or
    a previous call), so calling this twice is harmless.

    Args:
        settings: Application settings (log_level, log_format,
            database_log_level)
    """
    handler = logging.StreamHandler(sys.stderr)
    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        handlers=[handler],
        force=True,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        getattr(logging, settings.database_log_level)
    )
