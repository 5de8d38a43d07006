"""
Logging configuration for the EMS tracker.
Uses loguru for enhanced logging capabilities.
"""

import sys
from pathlib import Path
from loguru import logger

from emstracker.config import TrackerConfig


def setup_logging(config: TrackerConfig, console: bool = True) -> None:
    """
    Configure logging for the tracker.

    Args:
        config: Tracker configuration
        console: Whether to log to stderr (stdout is reserved for the table)
    """

    # Remove default handler
    logger.remove()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    simple_format = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

    if console:
        logger.add(
            sys.stderr,
            format=log_format,
            level=config.log_level,
            colorize=True,
        )

    if not config.log_file:
        return

    log_path = Path(config.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        str(log_path),
        format=simple_format,
        level=config.log_level,
        rotation="10 MB",
        retention="30 days",
    )

    # Error file (separate file for errors only)
    error_log_path = log_path.parent / "error.log"
    logger.add(
        str(error_log_path),
        format=simple_format,
        level="ERROR",
        rotation="10 MB",
        retention="60 days",
    )

    logger.debug(f"Logging initialized - Level: {config.log_level}, File: {log_path}")
