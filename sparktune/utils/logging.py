"""Logging configuration and setup utilities.

Library modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves; the CLI calls ``setup_logging`` once at start-up to route
records through rich.
"""
import logging
from typing import Union

from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"
DATE_FORMAT = "[%X]"


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Install a RichHandler on the root logger at the given level."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
