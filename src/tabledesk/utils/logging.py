"""Logging helpers shared across tabledesk modules."""

import logging
import os

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging once per process.

    Args:
        level: Log level name. Defaults to $TABLEDESK_LOG_LEVEL, then WARNING.
    """
    global _configured
    if _configured:
        return
    level_name = (level or os.environ.get("TABLEDESK_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=DEFAULT_FORMAT)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
