"""Business logic services."""

from api.services.privacy_service import PrivacyService
from api.services.portfolio_service import PortfolioService
from api.services.squad_service import SquadService

__all__ = [
    "PrivacyService",
    "PortfolioService",
    "SquadService",
]
