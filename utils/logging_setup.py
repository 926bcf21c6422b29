import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_LEVEL = logging.INFO


def configure_logging(level: int | str = DEFAULT_LOG_LEVEL) -> None:
    """Configure the root logger with a shared format and level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = DEFAULT_LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT)
