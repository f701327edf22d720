from typing import Optional, Union
import logging
import sys
from .handlers import CustomRotatingFileHandler
from .formatters import JSONFormatter


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> logging.Logger:
    """Set up a logger with a console handler and an optional JSON file handler"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring replaces the handlers installed by a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = CustomRotatingFileHandler(
            log_file,
            max_bytes=max_bytes,
            backup_count=backup_count
        )
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger
