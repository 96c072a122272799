import os
import sys
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: Optional[str] = None) -> None:
    """Install the single stderr sink used by the service.

    The level comes from the argument, else LOG_LEVEL, else INFO.
    """
    load_dotenv()
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
