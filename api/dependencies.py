"""Dependency injection for API endpoints."""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Header

from api.config import get_config
from api.middleware.error_handler import UnauthorizedError
from api.services.portfolio_service import PortfolioService
from api.services.privacy_service import PrivacyService
from api.services.squad_service import SquadService
from config.history import HistoryConfig
from config.privacy import PrivacyConfig
from persistence.store import SquadStore
from utils.config import ConfigLoader

logger = logging.getLogger(__name__)

# Global store instance
_store: SquadStore | None = None


def get_store() -> SquadStore:
    """Get or create the global SquadStore instance.

    Returns:
        SquadStore instance
    """
    global _store
    if _store is None:
        config = get_config()
        _store = SquadStore(database_url=config.database_url)
        logger.info("SquadStore initialized")
    return _store


def close_store() -> None:
    """Close the global SquadStore instance."""
    global _store
    if _store is not None:
        _store.close()
        _store = None
        logger.info("SquadStore closed")


@lru_cache
def get_privacy_config() -> PrivacyConfig:
    """Load privacy formatting configuration once."""
    return ConfigLoader.load_privacy(get_config().privacy_config_path)


@lru_cache
def get_history_config() -> HistoryConfig:
    """Load history sampling configuration once."""
    return ConfigLoader.load_history(get_config().history_config_path)


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Identify the requester from the X-User-Id header.

    Raises:
        UnauthorizedError: Header missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError("Missing X-User-Id header")
    return x_user_id.strip()


# Service dependencies

def get_privacy_service() -> PrivacyService:
    """Get PrivacyService instance.

    Returns:
        PrivacyService
    """
    return PrivacyService(get_store())


def get_portfolio_service() -> PortfolioService:
    """Get PortfolioService instance.

    Returns:
        PortfolioService
    """
    return PortfolioService(get_store(), history_config=get_history_config())


def get_squad_service() -> SquadService:
    """Get SquadService instance.

    Returns:
        SquadService
    """
    return SquadService(
        get_store(),
        privacy_config=get_privacy_config(),
        history_config=get_history_config(),
    )
