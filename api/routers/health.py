"""Health check endpoints."""

import logging
from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from api.dependencies import get_store
from persistence.store import REQUIRED_TABLES

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str
    timestamp: str


class ReadyResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    checks: dict
    timestamp: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    Returns service health status.
    """
    try:
        with get_store()._get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))

        return HealthResponse(
            status="healthy",
            database="connected",
            timestamp=datetime.now().isoformat(),
        )
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return HealthResponse(
            status="unhealthy",
            database=f"error: {str(e)}",
            timestamp=datetime.now().isoformat(),
        )


@router.get("/ready", response_model=ReadyResponse)
async def readiness_check():
    """Readiness check endpoint.

    Verifies the database is reachable and the schema is in place.
    """
    checks = {
        "database": False,
        "tables": False,
    }

    try:
        store = get_store()
        with store._get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
            checks["database"] = True

        tables = store.table_names()
        checks["tables"] = all(t in tables for t in REQUIRED_TABLES)

    except Exception as e:
        logger.error(f"Readiness check failed: {e}")

    return ReadyResponse(
        ready=all(checks.values()),
        checks=checks,
        timestamp=datetime.now().isoformat(),
    )
