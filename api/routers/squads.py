"""Squad (workspace) endpoints: history, leaderboard and activity."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_user_id, get_squad_service
from api.middleware.error_handler import APIError
from api.schemas.squads import (
    ActivityFeedResponse,
    LeaderboardResponse,
    SquadHistoryResponse,
)
from api.services.squad_service import SquadService
from history.periods import TimePeriod

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/workspaces", tags=["Squads"])


@router.get("/{workspace_id}/portfolio/history", response_model=SquadHistoryResponse)
async def get_squad_history(
    workspace_id: str,
    period: TimePeriod = Query(TimePeriod.ONE_MONTH, description="Look-back period"),
    user_id: str = Depends(get_current_user_id),
    squad_service: SquadService = Depends(get_squad_service),
):
    """Get squad total and average history.

    Members whose performance is hidden are counted in the metadata but
    contribute nothing to the series.
    """
    try:
        return squad_service.get_squad_history(workspace_id, user_id, period)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error getting squad history for workspace {workspace_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{workspace_id}/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    squad_service: SquadService = Depends(get_squad_service),
):
    """Get the workspace leaderboard.

    Values, performance and positions are formatted per member privacy.
    Only members sharing an exact value and visible performance are ranked.
    """
    try:
        return squad_service.get_leaderboard(workspace_id, user_id)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error getting leaderboard for workspace {workspace_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{workspace_id}/activity", response_model=ActivityFeedResponse)
async def get_activity(
    workspace_id: str,
    limit: int = Query(50, ge=1, le=500, description="Number of entries to return"),
    offset: int = Query(0, ge=0, description="Offset for pagination"),
    user_id: str = Depends(get_current_user_id),
    squad_service: SquadService = Depends(get_squad_service),
):
    """Get the workspace activity feed, newest first.

    Entries of members with hidden activity are left out (milestones and
    achievements excepted); amounts are removed unless the author shares
    activity in full.
    """
    try:
        return squad_service.get_activity(workspace_id, user_id, limit=limit, offset=offset)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error getting activity for workspace {workspace_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
