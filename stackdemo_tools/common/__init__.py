"""
================================================================================
StackDemo Tools Common Utilities
================================================================================

Shared configuration and logging setup for the test suites.

Exports:
    - ConfigReader: YAML key/value settings with built-in defaults
    - ConfigError: Raised internally when a typed setting is malformed
    - init_logger: Initialise the loguru logger with standard settings
    - ensure_directory: Create a directory if it does not exist

Usage:
    from stackdemo_tools.common import ConfigReader, init_logger

    config = ConfigReader()
    init_logger(level=config.get_str("logging.level", "INFO"))
    base_url = config.base_url

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .config_reader import ConfigError, ConfigReader, DEFAULT_CONFIG_PATH

# ============================================================
# Logging Setup
# ============================================================

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env or INFO.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
        force: Re-initialise even if already configured.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="test-output/logs/run.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    # Remove default handler
    logger.remove()

    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    format_string = format_string or DEFAULT_LOG_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation="10 MB",
            retention="7 days",
            # xdist workers share the file
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Returns:
        The directory as a Path (for chaining)
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


# Export public API
__all__ = [
    "ConfigReader",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "init_logger",
    "ensure_directory",
]
