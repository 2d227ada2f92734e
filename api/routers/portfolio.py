"""Portfolio history endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_user_id, get_portfolio_service
from api.middleware.error_handler import APIError
from api.schemas.portfolio import PortfolioHistoryResponse
from api.services.portfolio_service import PortfolioService
from history.periods import TimePeriod

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/portfolio", tags=["Portfolio"])


@router.get("/history", response_model=PortfolioHistoryResponse)
async def get_portfolio_history(
    period: TimePeriod = Query(TimePeriod.ONE_MONTH, description="Look-back period"),
    user_id: str = Depends(get_current_user_id),
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
):
    """Get the caller's portfolio history.

    Snapshots are sampled onto an evenly spaced grid for the period.
    Gaps are filled from neighbouring snapshots and flagged as
    interpolated; coverage and data quality describe how much of the
    series is real.
    """
    try:
        return portfolio_service.get_history(user_id, period)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error getting portfolio history for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
