"""Base configuration class."""

from pathlib import Path
from typing import Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict

C = TypeVar("C", bound="BaseConfig")


class BaseConfig(BaseModel):
    """
    Base for engine settings read from YAML.

    Unknown keys are rejected so a misspelt setting fails loudly instead
    of silently falling back to its default.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    @classmethod
    def from_yaml(cls: Type[C], path: Path | str) -> C:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Validated configuration instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            pydantic.ValidationError: If a value is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def load_or_default(cls: Type[C], path: Optional[Path | str]) -> C:
        """Load from ``path`` when it exists, otherwise return defaults."""
        if path is not None and Path(path).exists():
            return cls.from_yaml(path)
        return cls()

    def to_yaml(self, path: Path | str) -> None:
        """
        Write configuration to YAML, keeping field order.

        Args:
            path: Destination file (parent directories are created)
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)
