"""
Central logging configuration for icsdecode.

Keeps the decoder's own loggers at INFO (or DEBUG on request) and installs a
colorized console handler when the application has not configured one.
"""

import logging
import sys
from typing import Optional

from colorlog import ColoredFormatter

from .config import DecoderSettings, get_settings, normalize_log_level

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

PACKAGE_LOGGERS = [
    "icsdecode",
    "icsdecode.lexer",
    "icsdecode.decoder",
    "icsdecode.rrule",
    "icsdecode.values",
    "icsdecode.stream",
    "icsdecode.config",
]


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    log_level: Optional[str] = None,
    settings: Optional[DecoderSettings] = None,
) -> None:
    """
    Configure logging levels for icsdecode.

    Args:
        debug_mode: Whether to enable debug logging for icsdecode modules
        force_debug: Override debug mode setting (None to use settings.debug)
        log_level: Root log level name; defaults to settings.log_level
        settings: Decoder settings (global settings when omitted)

    Environment Variables (through DecoderSettings):
        ICSDECODE_DEBUG: Set to '1', 'true', 'yes' to enable debug logging
        ICSDECODE_LOG_LEVEL: Root log level (NOTSET, DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Raises:
        ValueError: If log_level is not a standard level name
    """
    settings = settings if settings is not None else get_settings()

    if force_debug is not None:
        final_debug = force_debug
    else:
        final_debug = debug_mode or settings.debug

    level_name = normalize_log_level(log_level) if log_level else settings.log_level
    root_level = logging.DEBUG if final_debug and log_level is None else getattr(logging, level_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if the application has not configured one
    if not root_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
        root_logger.addHandler(handler)

    package_level = logging.DEBUG if final_debug else logging.INFO
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(package_level)

    if final_debug:
        root_logger.info("Debug logging enabled for icsdecode modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for name in PACKAGE_LOGGERS:
        status[name] = logging.getLevelName(logging.getLogger(name).level)
    return status
