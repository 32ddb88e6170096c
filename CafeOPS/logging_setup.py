import logging
from typing import Optional, Union

from CafeOPS import config


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure the root logger for console entry points.
    Library modules only call logging.getLogger(__name__).
    """
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=config.LOG_FORMAT)
