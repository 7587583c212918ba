"""Logger configuration."""

import sys

from loguru import logger

from objstore.config.model import LOG_LEVELS

LOG_FORMAT = (
    '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | '
    '<level>{level: <8}</level> | '
    '<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>'
)


def init_logger(log_level: LOG_LEVELS = 'INFO') -> None:
    """Replace loguru's default sink with a stderr sink at ``log_level``.

    :param log_level: The minimum level to log.
    :type log_level: LOG_LEVELS
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level, format=LOG_FORMAT)
    logger.debug(f'logger initialized at level {log_level}')
