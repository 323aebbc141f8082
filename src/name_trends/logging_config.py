"""
Logging Configuration
Sets up the package logger for both front ends.
"""
import logging
import os
import sys
from typing import Optional, Union


def level_from_env(default: int = logging.INFO) -> int:
    """Reads NAME_TRENDS_LOG_LEVEL (e.g. "DEBUG"), falling back to `default`."""
    name = os.environ.get("NAME_TRENDS_LOG_LEVEL", "")
    level = logging.getLevelName(name.upper()) if name else default
    return level if isinstance(level, int) else default


def setup_logging(level: Union[int, None] = None, log_file: Optional[str] = None, console: bool = True) -> None:
    """
    Configures the logger for the 'name_trends' namespace.

    Args:
        level: Logging level, defaults to NAME_TRENDS_LOG_LEVEL or INFO.
        log_file: Optional path to save logs to a file.
        console: Log to stdout. The TUI turns this off since stdout is the screen.
    """
    if level is None:
        level = level_from_env()

    logger = logging.getLogger("name_trends")
    logger.setLevel(level)

    # Avoid duplicate handlers when the app is restarted in-process
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
