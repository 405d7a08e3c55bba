"""
Logging configuration
=====================

Console logging for the service process, configured once at bootstrap.
"""
import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

# Third-party loggers that are too chatty at INFO
THIRD_PARTY_LOGGERS = [
    "uvicorn.access",
    "httpx",
    "httpcore",
    "fastapi",
]


def setup_logging(level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Args:
        level: Log level name or number for application loggers

    Returns:
        The root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace existing handlers so repeated setup does not duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))

    return root_logger
