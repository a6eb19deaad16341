# app/core/logging_config.py
import logging

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging once for the backend process or a script.

    Level comes from the LOG_LEVEL setting unless given explicitly.
    """
    level = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
