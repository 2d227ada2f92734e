"""Privacy formatting configuration."""

from pydantic import Field

from config.base import BaseConfig


class PrivacyConfig(BaseConfig):
    """
    Configuration for privacy-aware value formatting.

    Controls how approximate portfolio values are bucketed and what
    placeholder is shown when a value is withheld.
    """

    approximate_bucket_usd: float = Field(
        default=10000.0,
        description="Width of the range shown for approximate portfolio values",
        gt=0.0,
    )
    hidden_placeholder: str = Field(
        default="Hidden",
        description="Display text used when a value is withheld",
        min_length=1,
    )
    currency_symbol: str = Field(
        default="$",
        description="Currency prefix for formatted amounts",
    )
