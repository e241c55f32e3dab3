"""JSON structured logging configuration."""
from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from originality.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure root logger with JSON output for audit-run observability."""
    handler = logging.StreamHandler(sys.stdout)

    formatter = JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
        },
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level or settings.APP_LOG_LEVEL)

    # Per-page scan details are only useful while developing thresholds
    logging.getLogger("originality.core").setLevel(
        logging.DEBUG if settings.APP_ENV == "development" else logging.INFO
    )
