"""Privacy service: settings reads/writes and per-workspace resolution."""

from typing import Optional, Tuple

from api.middleware.error_handler import ForbiddenError, InvalidSettingsError, NotFoundError
from api.schemas.privacy import (
    EffectivePrivacyResponse,
    PrivacySettingsPayload,
    UserPrivacyResponse,
    VisibilityDecisionsSchema,
    WorkspacePolicySchema,
)
from persistence.store import SquadStore, User, Workspace, WorkspaceMember
from privacy.classifier import VisibilityDecisions
from privacy.formatter import describe_settings
from privacy.resolver import resolve_privacy
from privacy.settings import EffectivePrivacy, PrivacySettingsError
from utils.logger import get_api_logger

logger = get_api_logger()


class PrivacyService:
    """Service for privacy settings and their resolution."""

    def __init__(self, store: SquadStore):
        """Initialize privacy service.

        Args:
            store: Database store
        """
        self.store = store

    # ------------------------------------------------------------------
    # Lookups shared by the other services
    # ------------------------------------------------------------------

    def require_user(self, user_id: str) -> User:
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", detail={"user_id": user_id})
        return user

    def require_membership(self, workspace_id: str, user_id: str) -> Tuple[Workspace, WorkspaceMember]:
        """Load a workspace and the caller's membership in it.

        Raises:
            NotFoundError: Workspace does not exist
            ForbiddenError: Caller is not a member
        """
        workspace = self.store.get_workspace(workspace_id)
        if workspace is None:
            raise NotFoundError(
                f"Workspace {workspace_id} not found", detail={"workspace_id": workspace_id}
            )
        member = self.store.get_member(workspace_id, user_id)
        if member is None:
            raise ForbiddenError(
                "Not a member of this workspace", detail={"workspace_id": workspace_id}
            )
        return workspace, member

    @staticmethod
    def resolve_member(workspace: Workspace, member: WorkspaceMember) -> EffectivePrivacy:
        """Effective privacy of one member inside a workspace."""
        return resolve_privacy(
            member.privacy_defaults,
            workspace.privacy_policy,
            member.privacy_override,
        )

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def get_user_privacy(self, user_id: str) -> UserPrivacyResponse:
        """Get the caller's default privacy settings."""
        user = self.require_user(user_id)
        return UserPrivacyResponse(
            user_id=user.id,
            privacy_defaults=PrivacySettingsPayload.from_settings(user.privacy_defaults),
            labels=describe_settings(user.privacy_defaults),
        )

    def update_user_privacy(self, user_id: str, payload: PrivacySettingsPayload) -> UserPrivacyResponse:
        """Replace the caller's default privacy settings."""
        self.require_user(user_id)
        try:
            settings = payload.to_settings()
        except PrivacySettingsError as e:
            raise InvalidSettingsError(e.errors, str(e)) from e

        self.store.set_privacy_defaults(user_id, settings)
        logger.info(
            "Updated privacy defaults",
            extra_data={"user_id": user_id, "settings": settings.to_dict()},
        )
        return self.get_user_privacy(user_id)

    def update_workspace_override(
        self,
        workspace_id: str,
        user_id: str,
        payload: Optional[PrivacySettingsPayload],
    ) -> EffectivePrivacyResponse:
        """Set or clear the caller's override for one workspace."""
        self.require_membership(workspace_id, user_id)
        settings = None
        if payload is not None:
            try:
                settings = payload.to_settings()
            except PrivacySettingsError as e:
                raise InvalidSettingsError(e.errors, str(e)) from e

        self.store.set_privacy_override(workspace_id, user_id, settings)
        logger.info(
            "Updated workspace privacy override",
            extra_data={
                "workspace_id": workspace_id,
                "user_id": user_id,
                "cleared": settings is None,
            },
        )
        return self.get_effective_privacy(workspace_id, user_id)

    def get_effective_privacy(self, workspace_id: str, user_id: str) -> EffectivePrivacyResponse:
        """Resolve the caller's privacy in a workspace."""
        workspace, member = self.require_membership(workspace_id, user_id)
        effective = self.resolve_member(workspace, member)
        decisions = VisibilityDecisions.classify(effective)

        return EffectivePrivacyResponse(
            workspace_id=workspace_id,
            user_id=user_id,
            settings=PrivacySettingsPayload.from_settings(effective.settings),
            source=effective.source.value,
            decisions=VisibilityDecisionsSchema(**decisions.to_dict()),
            workspace_policy=WorkspacePolicySchema.from_policy(workspace.privacy_policy),
            has_override=member.privacy_override is not None,
        )
