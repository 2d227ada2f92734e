"""API routers package."""

from api.routers.health import router as health_router
from api.routers.privacy import router as privacy_router
from api.routers.portfolio import router as portfolio_router
from api.routers.squads import router as squads_router

__all__ = [
    "health_router",
    "privacy_router",
    "portfolio_router",
    "squads_router",
]
