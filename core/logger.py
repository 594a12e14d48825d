"""
Service Logger Setup

Configures the standard logging module for a service from LoggingConfig.

Usage:
    from core.logger import setup_service_logger

    logger = setup_service_logger("catalog_service")
    logger.info("Service started")
"""

import logging
import sys
from typing import Optional

from core.config import LoggingConfig, get_settings

_configured_services = set()


def setup_service_logger(
    service_name: str,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Get a logger for a service, configuring the root handlers once.

    Args:
        service_name: Logger name, usually the service name
        config: Optional LoggingConfig (defaults to global settings)

    Returns:
        logging.Logger: Configured logger
    """
    config = config or get_settings().logging
    logger = logging.getLogger(service_name)

    if service_name in _configured_services:
        return logger

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(config.log_format)

    root = logging.getLogger()
    root.setLevel(level)

    if config.enable_console and not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    ):
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        root.addHandler(console)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Driver chatter stays at WARNING unless explicitly debugging
    logging.getLogger("pymongo").setLevel(max(level, logging.WARNING))
    logging.getLogger("nats").setLevel(max(level, logging.WARNING))

    _configured_services.add(service_name)
    logger.debug(f"Logger configured for {service_name} ({config.environment}, {config.log_level})")
    return logger
