import sys
from loguru import logger

from EventHub.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = None):
    """Replace loguru's default handler with a single stdout sink."""
    logger.remove()
    logger.add(
        sys.stdout,
        level=(level or settings.LOG_LEVEL),
        format=LOG_FORMAT,
        serialize=False,
        enqueue=True
    )
    return logger


configure_logging()

__all__ = ["logger", "configure_logging"]
