"""
Logging setup for command-line entry points.

Library modules only create `logging.getLogger(__name__)` loggers; the
application decides handlers and level.
"""
import logging
from typing import Optional

from .settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging with the settings' level unless one is given."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, level_name, logging.INFO),
    )
