"""Configuration management using Pydantic models."""

from config.base import BaseConfig
from config.privacy import PrivacyConfig
from config.history import HistoryConfig

__all__ = [
    "BaseConfig",
    "PrivacyConfig",
    "HistoryConfig",
]
