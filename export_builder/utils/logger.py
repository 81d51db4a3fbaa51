"""Logging configuration using loguru."""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

_logger_configured = False

DEFAULT_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
)

DEFAULT_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} | {message}"


def setup_logger(
    log_level: str = "WARNING",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: bool = True,
    console_format: str | None = None,
    file_format: str | None = None,
) -> Any:
    """Configure and setup the logger.

    The console handler writes to stderr so it never interleaves with the
    status line of a running build.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file (None for console only)
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 week")
        compression: Whether to compress rotated logs
        console_format: Custom console log format
        file_format: Custom file log format

    Returns:
        Configured logger instance
    """
    global _logger_configured

    logger.remove()
    logger.configure(extra={"name": "export_builder"})

    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=console_format or DEFAULT_CONSOLE_FORMAT,
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_path),
            level="DEBUG",  # File always captures DEBUG level
            format=file_format or DEFAULT_FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="zip" if compression else None,
            encoding="utf-8",
        )

    _logger_configured = True
    return logger


def get_logger(name: str | None = None) -> Any:
    """Get a logger instance.

    Args:
        name: Optional module name for context

    Returns:
        Logger instance
    """
    if not _logger_configured:
        setup_logger()

    if name:
        return logger.bind(name=name)
    return logger


def configure_from_settings(settings: Any, log_level: str | None = None) -> Any:
    """Configure logger from Settings object.

    Args:
        settings: Settings object with logging configuration
        log_level: Optional level overriding the configured one

    Returns:
        Configured logger instance
    """
    logging_config = settings.logging

    return setup_logger(
        log_level=log_level or logging_config.level,
        log_file=logging_config.file,
        rotation=logging_config.rotation,
        retention=logging_config.retention,
        compression=logging_config.compression,
        console_format=logging_config.console_format,
    )
