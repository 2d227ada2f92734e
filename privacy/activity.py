"""Privacy filtering for workspace activity feeds."""

from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from portfolio.activity import Activity
from privacy.classifier import DisclosureTier, can_show_activity, can_show_activity_amounts
from privacy.settings import PrivacySettings
from utils.logger import get_privacy_logger

logger = get_privacy_logger()


def activity_privacy_level(privacy: PrivacySettings) -> DisclosureTier:
    """Map a member's activity level onto full / partial / hidden."""
    if can_show_activity_amounts(privacy):
        return DisclosureTier.FULL
    if can_show_activity(privacy):
        return DisclosureTier.PARTIAL
    return DisclosureTier.HIDDEN


def should_show_activity(activity: Activity, privacy: PrivacySettings) -> bool:
    """
    Decide whether an entry appears in the feed at all.

    Milestones and achievements always appear; everything else needs
    the author's activity level to be above hidden.
    """
    if activity.type.is_milestone:
        return True
    return can_show_activity(privacy)


def redact_activity(activity: Activity, privacy: PrivacySettings) -> Activity:
    """
    Strip quantity, price, value and metadata unless amounts may be shown.

    Args:
        activity: Entry as stored
        privacy: Author's effective privacy in the workspace

    Returns:
        The same entry, or a copy with amounts removed
    """
    if can_show_activity_amounts(privacy):
        return activity
    return replace(activity, quantity=None, price=None, value=None, metadata={})


def filter_activities(
    activities: Iterable[Activity],
    privacy_for: Callable[[str], Optional[PrivacySettings]],
) -> List[Activity]:
    """
    Filter and redact a feed entry by entry.

    Args:
        activities: Entries in display order
        privacy_for: Author user id -> effective privacy; None drops the
            entry (author no longer a member)

    Returns:
        Visible entries with amounts redacted as required
    """
    visible = []
    dropped = 0
    for activity in activities:
        privacy = privacy_for(activity.user_id)
        if privacy is None or not should_show_activity(activity, privacy):
            dropped += 1
            continue
        visible.append(redact_activity(activity, privacy))

    if dropped:
        logger.debug(
            "Filtered activity feed",
            extra_data={"shown": len(visible), "dropped": dropped},
        )
    return visible
