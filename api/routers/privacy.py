"""Privacy settings endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user_id, get_privacy_service
from api.middleware.error_handler import APIError
from api.schemas.privacy import (
    EffectivePrivacyResponse,
    UserPrivacyRequest,
    UserPrivacyResponse,
    WorkspaceOverrideRequest,
)
from api.services.privacy_service import PrivacyService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Privacy"])


@router.get("/users/me/privacy", response_model=UserPrivacyResponse)
async def get_my_privacy(
    user_id: str = Depends(get_current_user_id),
    privacy_service: PrivacyService = Depends(get_privacy_service),
):
    """Get the caller's default privacy settings.

    Stored settings are read leniently: missing or invalid fields are
    returned as their defaults.
    """
    try:
        return privacy_service.get_user_privacy(user_id)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error getting privacy settings for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/users/me/privacy", response_model=UserPrivacyResponse)
async def update_my_privacy(
    request: UserPrivacyRequest,
    user_id: str = Depends(get_current_user_id),
    privacy_service: PrivacyService = Depends(get_privacy_service),
):
    """Replace the caller's default privacy settings.

    Every field is required; unknown fields or values are rejected (422).
    """
    try:
        return privacy_service.update_user_privacy(user_id, request.privacy_defaults)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error updating privacy settings for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/workspaces/{workspace_id}/privacy", response_model=EffectivePrivacyResponse)
async def get_workspace_privacy(
    workspace_id: str,
    user_id: str = Depends(get_current_user_id),
    privacy_service: PrivacyService = Depends(get_privacy_service),
):
    """Get the privacy enforced for the caller in a workspace.

    Includes which source decided it (enforced, workspace_override or
    user_default) and the resulting display decisions.
    """
    try:
        return privacy_service.get_effective_privacy(workspace_id, user_id)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error resolving privacy in workspace {workspace_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/workspaces/{workspace_id}/privacy", response_model=EffectivePrivacyResponse)
async def update_workspace_privacy(
    workspace_id: str,
    request: WorkspaceOverrideRequest,
    user_id: str = Depends(get_current_user_id),
    privacy_service: PrivacyService = Depends(get_privacy_service),
):
    """Set (or clear with null) the caller's override for a workspace.

    The workspace minimum still applies on top of the override.
    """
    try:
        return privacy_service.update_workspace_override(
            workspace_id, user_id, request.privacy_override
        )
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error updating privacy override in workspace {workspace_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
