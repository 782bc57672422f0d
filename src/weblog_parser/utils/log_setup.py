"""
Logging configuration for scripts.

Library modules only create module-level loggers; scripts call
setup_logging once at startup.
"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging.

    Args:
        level: Logging level as int or name (e.g. "DEBUG")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
