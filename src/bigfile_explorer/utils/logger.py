import logging
from typing import Optional

ROOT_LOGGER_NAME = "bigfile_explorer"

def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Create a logger with the given name and level.

    Handlers live on the package logger so that module loggers propagate
    into whatever LogConfig installs later.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)

    if not root.handlers:  # Only add handler if none exists
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(logging.INFO)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)

    return logger
