"""Configuration loading utilities."""

from pathlib import Path
from typing import Optional, Type, TypeVar

from config.history import HistoryConfig
from config.privacy import PrivacyConfig

T = TypeVar("T")


class ConfigLoader:
    """
    Convenience loaders for the engine config types.

    Each loader reads ``configs/<name>.yaml`` unless given a path and
    falls back to defaults when the file is missing.
    """

    @staticmethod
    def get_default_config_dir() -> Path:
        """
        Get default configuration directory.

        Returns:
            Path to configs directory
        """
        return Path(__file__).parent.parent / "configs"

    @staticmethod
    def _resolve(path: Optional[Path | str], filename: str) -> Path:
        return Path(path) if path else ConfigLoader.get_default_config_dir() / filename

    @staticmethod
    def load_privacy(path: Optional[Path | str] = None) -> PrivacyConfig:
        """Load value formatting settings (defaults if the file doesn't exist)."""
        return PrivacyConfig.load_or_default(ConfigLoader._resolve(path, "privacy.yaml"))

    @staticmethod
    def load_history(path: Optional[Path | str] = None) -> HistoryConfig:
        """Load history sampling settings (defaults if the file doesn't exist)."""
        return HistoryConfig.load_or_default(ConfigLoader._resolve(path, "history.yaml"))


def load_config(path: Path | str, config_class: Type[T]) -> T:
    """
    Generic configuration loader.

    Args:
        path: Path to config YAML file
        config_class: Configuration class to instantiate

    Returns:
        Loaded and validated configuration instance

    Example:
        >>> from config.history import HistoryConfig
        >>> config = load_config("configs/history.yaml", HistoryConfig)
    """
    return config_class.from_yaml(path)
