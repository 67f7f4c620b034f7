"""Utilities to configure logging from environment settings."""

from __future__ import annotations

import logging

from mediaman.core.config import get_settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Apply the configured log level to the root logger."""

    settings = get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=_FORMAT)
    # SQLAlchemy logs every statement at INFO when echo is on
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
