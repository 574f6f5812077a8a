"""Common utilities for careguard."""

from .logger import configure_logging, get_logger, setup_logger
from .config import load_config

__all__ = ["configure_logging", "get_logger", "load_config", "setup_logger"]
