import logging
import os
from typing import Optional, Union


def get_logger(logger_name: str = __name__, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Creates and configures an application logger.

    Args:
        logger_name: Logger name, usually the module's __name__
        level: Logging level; defaults to LOG_LEVEL from the environment or INFO

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        if level is None:
            level = _default_level()
        logger.setLevel(level)

        # Console output
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(formatter)

        logger.addHandler(console_handler)

    return logger


def _default_level() -> Union[int, str]:
    return os.getenv("LOG_LEVEL", "INFO").upper()
