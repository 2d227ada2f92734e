"""Pydantic schemas for API request/response models."""

from api.schemas.common import (
    CamelModel,
    ErrorResponse,
    PaginationParams,
    SuccessResponse,
)
from api.schemas.portfolio import (
    PortfolioHistoryResponse,
    SamplePointSchema,
)
from api.schemas.privacy import (
    EffectivePrivacyResponse,
    PrivacySettingsPayload,
    UserPrivacyRequest,
    UserPrivacyResponse,
    VisibilityDecisionsSchema,
    WorkspaceOverrideRequest,
    WorkspacePolicySchema,
)
from api.schemas.squads import (
    ActivityFeedResponse,
    ActivitySchema,
    LeaderboardEntrySchema,
    LeaderboardResponse,
    LeaderboardStatsSchema,
    SquadHistoryResponse,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "PaginationParams",
    "SuccessResponse",
    "PortfolioHistoryResponse",
    "SamplePointSchema",
    "EffectivePrivacyResponse",
    "PrivacySettingsPayload",
    "UserPrivacyRequest",
    "UserPrivacyResponse",
    "VisibilityDecisionsSchema",
    "WorkspaceOverrideRequest",
    "WorkspacePolicySchema",
    "ActivityFeedResponse",
    "ActivitySchema",
    "LeaderboardEntrySchema",
    "LeaderboardResponse",
    "LeaderboardStatsSchema",
    "SquadHistoryResponse",
]
