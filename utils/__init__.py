"""Utilities for logging, configuration, and common operations."""

from utils.logger import setup_logger, get_logger
from utils.config import load_config, ConfigLoader

__all__ = [
    "setup_logger",
    "get_logger",
    "load_config",
    "ConfigLoader",
]
