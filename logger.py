import logging
from rich.logging import RichHandler

from config import config

# Silence noisy libraries
logging.getLogger("pymongo").setLevel(logging.CRITICAL)
logging.getLogger("urllib3").setLevel(logging.CRITICAL)
logging.getLogger("python_multipart.multipart").setLevel(logging.CRITICAL)


def _level() -> int:
    level = logging.getLevelName(str(config.LOG_LEVEL).upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str = "portfolio") -> logging.Logger:
    """Return a logger that writes through rich"""
    logger = logging.getLogger(name)
    logger.setLevel(_level())

    # prevent multiple handlers if get_logger is called twice
    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True, markup=False, show_path=False)
        handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    return logger
