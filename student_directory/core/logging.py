"""Logging setup for the application process."""

import logging

from student_directory.core.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging once, at process start."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQL echo is controlled by the engines, keep the library logger quiet.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
