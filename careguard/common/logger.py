"""Logging for careguard.

Library modules only obtain loggers under the ``careguard`` namespace with
:func:`get_logger`. The host application (or the API factory and the CLI)
decides where records go by calling :func:`setup_logger` or
:func:`configure_logging` once for the ``careguard`` logger tree.
"""

import logging
import logging.handlers
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_level(level: str) -> int:
    level_upper = level.upper()
    if level_upper not in LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of: {', '.join(LEVELS)}")
    return getattr(logging, level_upper)


def setup_logger(
    name: str = "careguard",
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    console: bool = True,
) -> logging.Logger:
    """Attach careguard handlers to a logger.

    Args:
        name: Logger name (``careguard`` covers every library logger)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of a rotating log file; None disables file output
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep
        console: Also log to stderr

    Returns:
        Configured logger instance

    Raises:
        ValueError: If the level name is not a standard logging level
    """
    logger = logging.getLogger(name)
    logger.setLevel(_parse_level(level))

    # Handlers are attached once; later calls only adjust the level
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def configure_logging(settings, name: str = "careguard") -> logging.Logger:
    """Configure careguard logging from :class:`~careguard.common.settings.Settings`.

    File output goes to ``<log_dir>/<name>.log`` when ``file_logging`` is
    enabled, rotated per ``log_max_bytes`` and ``log_backup_count``.
    """
    log_file = None
    if settings.file_logging:
        log_file = os.path.join(settings.log_dir, f"{name}.log")

    return setup_logger(
        name,
        level=settings.log_level,
        log_file=log_file,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name."""
    return logging.getLogger(name)
