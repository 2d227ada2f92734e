"""FastAPI application factory for the Squadfolio API.

This module creates and configures the FastAPI application with:
- REST API endpoints (versioned at /api/v1/)
- CORS middleware
- Request logging
- Error handling
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import get_config
from api.dependencies import close_store, get_store
from api.middleware.error_handler import APIError, ErrorHandlerMiddleware, error_handler
from api.middleware.logging import RequestLoggingMiddleware
from api.routers.health import router as health_router
from api.routers.portfolio import router as portfolio_router
from api.routers.privacy import router as privacy_router
from api.routers.squads import router as squads_router
from utils.logger import setup_logger

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Handles startup and shutdown tasks.
    """
    logger.info("Starting Squadfolio API server...")

    config = get_config()
    setup_logger(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        json_format=config.log_json,
    )

    # Initialize database connection (bootstraps the schema if needed)
    get_store()

    logger.info("Squadfolio API server started successfully")

    yield

    logger.info("Shutting down Squadfolio API server...")
    close_store()
    logger.info("Squadfolio API server shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    config = get_config()

    app = FastAPI(
        title="Squadfolio API",
        description="""
## Overview

Privacy-aware portfolio sharing for investment squads.

Every member decides how much of their portfolio others may see; a
workspace can raise that to a minimum or enforce full transparency.
All responses below are already filtered by the resolved privacy.

## Authentication

Requests identify the caller with the `X-User-Id` header.

## REST Endpoints

All REST endpoints are versioned at `/api/v1/`:

- **Privacy**: `/api/v1/users/me/privacy`, `/api/v1/workspaces/{id}/privacy`
- **Portfolio**: `/api/v1/portfolio/history?period=1M`
- **Squads**: `/api/v1/workspaces/{id}/portfolio/history`,
  `/api/v1/workspaces/{id}/leaderboard`, `/api/v1/workspaces/{id}/activity`

Periods: `1D`, `1W`, `1M`, `3M`, `6M`, `1Y`, `YTD`.
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_exception_handler(APIError, error_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(privacy_router)
    app.include_router(portfolio_router)
    app.include_router(squads_router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
    )
