"""
Service logger setup

Every module logs through ``logging.getLogger(__name__)``; entry points call
``setup_service_logger`` once to attach handlers driven by LoggingConfig.
"""
import logging
import sys
from typing import Optional

from core.config import LoggingConfig, get_logging_config


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure and return the named service logger.

    Args:
        service_name: Logger name, usually the service package name
        level: Overrides LOG_LEVEL when given
        log_file: Overrides LOG_FILE when given
        config: Logging configuration (loaded from env when omitted)

    Returns:
        Configured logger; calling again does not duplicate handlers
    """
    config = config or get_logging_config()
    logger = logging.getLogger(service_name)
    logger.setLevel((level or config.log_level).upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

    path = log_file if log_file is not None else config.log_file
    if path:
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
