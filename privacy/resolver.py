"""Combine the three privacy sources into one effective decision.

Resolution order for a user inside a workspace:
    1. Enforced transparency wins outright (maximum disclosure everywhere).
    2. Per field, the member's workspace override wins over their default.
    3. The workspace minimum is applied to every field, always.

The resolver is a pure function and never fails; absent inputs mean
"no constraint".
"""

from enum import Enum
from typing import Mapping, Optional

from privacy.levels import PRIVACY_FIELDS, higher_rank, lowest
from privacy.settings import (
    EffectivePrivacy,
    PrivacySettings,
    PrivacySource,
    WorkspacePrivacyPolicy,
)
from utils.logger import get_privacy_logger

logger = get_privacy_logger()


def resolve_privacy(
    user_default: PrivacySettings,
    workspace_policy: Optional[WorkspacePrivacyPolicy] = None,
    workspace_override: Optional[Mapping[str, Enum]] = None,
) -> EffectivePrivacy:
    """
    Resolve the privacy actually enforced for a user in a workspace.

    Args:
        user_default: The user's default settings (always total)
        workspace_policy: Workspace rules, or None for no rules
        workspace_override: Member's per-workspace override; may be partial
            (a full PrivacySettings is accepted too)

    Returns:
        EffectivePrivacy with a source tag
    """
    if workspace_policy is not None and workspace_policy.enforced_transparency:
        return EffectivePrivacy(
            **PrivacySettings.maximum().as_mapping(),
            source=PrivacySource.ENFORCED,
        )

    override = _as_partial(workspace_override)
    minimum = {}
    if workspace_policy is not None and workspace_policy.minimum_sharing:
        minimum = workspace_policy.minimum_sharing

    levels = {}
    raised = []
    for name in PRIVACY_FIELDS:
        candidate = override.get(name, user_default.level(name))
        floor = minimum.get(name, lowest(name))
        levels[name] = higher_rank(name, candidate, floor)
        if levels[name] is not candidate:
            raised.append(name)

    source = (
        PrivacySource.WORKSPACE_OVERRIDE
        if workspace_override is not None
        else PrivacySource.USER_DEFAULT
    )

    if raised:
        logger.debug(
            "Workspace minimum raised privacy levels",
            extra_data={"fields": raised, "source": source.value},
        )

    return EffectivePrivacy(**levels, source=source)


def _as_partial(settings) -> Mapping[str, Enum]:
    if settings is None:
        return {}
    if isinstance(settings, PrivacySettings):
        return settings.as_mapping()
    return settings
