"""Squad service: privacy-aware history, leaderboard and activity feed."""

from datetime import date
from typing import Dict, List, Optional

import numpy as np

from api.schemas.squads import (
    ActivityFeedResponse,
    ActivitySchema,
    AveragePointSchema,
    FormattedValueSchema,
    LeaderboardEntrySchema,
    LeaderboardResponse,
    LeaderboardStatsSchema,
    MemberPointSchema,
    MemberSeriesSchema,
    PerformanceSchema,
    PositionSchema,
    SquadHistoryResponse,
    SquadMetadataSchema,
    TotalPointSchema,
    TrendPointSchema,
)
from api.services.portfolio_service import PortfolioService
from api.services.privacy_service import PrivacyService
from config.history import HistoryConfig
from config.privacy import PrivacyConfig
from history.aggregator import MemberHistory, MemberPoint, aggregate
from history.periods import TimePeriod
from persistence.store import SquadStore
from privacy.activity import activity_privacy_level, filter_activities
from privacy.classifier import (
    can_rank_in_leaderboard,
    is_visible_in_aggregates,
    performance_disclosure_tier,
)
from privacy.formatter import (
    filter_positions,
    format_performance,
    format_portfolio_value,
    performance_beside_value,
)
from privacy.settings import EffectivePrivacy
from utils.logger import get_api_logger

logger = get_api_logger()


def _member_points(points: List[MemberPoint]) -> List[MemberPointSchema]:
    return [
        MemberPointSchema(date=p.date, value=p.value, percent_change=p.percent_change)
        for p in points
    ]


class SquadService:
    """Service for workspace-level views that combine several members."""

    def __init__(
        self,
        store: SquadStore,
        privacy_config: Optional[PrivacyConfig] = None,
        history_config: Optional[HistoryConfig] = None,
    ):
        """Initialize squad service.

        Args:
            store: Database store
            privacy_config: Value formatting configuration
            history_config: Sampling configuration
        """
        self.store = store
        self.privacy_config = privacy_config or PrivacyConfig()
        self.privacy = PrivacyService(store)
        self.portfolio = PortfolioService(store, history_config)

    def _resolve_members(self, workspace_id: str, user_id: str):
        """Check access, then resolve every member's effective privacy."""
        workspace, _ = self.privacy.require_membership(workspace_id, user_id)
        members = self.store.get_members(workspace_id)
        return [(member, self.privacy.resolve_member(workspace, member)) for member in members]

    # ========================================================================
    # Squad history
    # ========================================================================

    def get_squad_history(
        self,
        workspace_id: str,
        user_id: str,
        period: TimePeriod,
        today: Optional[date] = None,
    ) -> SquadHistoryResponse:
        """Get aggregated squad history for a period.

        Hidden members' snapshots are never loaded; the caller's own
        series is always sampled so it can be returned to them.
        """
        today = today or date.today()
        resolved = self._resolve_members(workspace_id, user_id)

        inputs = []
        for member, effective in resolved:
            points = []
            if is_visible_in_aggregates(effective) or member.user_id == user_id:
                history, _ = self.portfolio.sample_user(member.user_id, period, today)
                points = history.points
            inputs.append(MemberHistory(member.user_id, member.user_name, effective, points))

        squad = aggregate(inputs, current_user_id=user_id)

        return SquadHistoryResponse(
            workspace_id=workspace_id,
            period=period.value,
            squad_average=[
                AveragePointSchema(date=p.date, percent_change=p.percent_change)
                for p in squad.squad_average
            ],
            squad_total=[TotalPointSchema(date=p.date, value=p.value) for p in squad.squad_total],
            members=[
                MemberSeriesSchema(
                    user_id=m.user_id,
                    name=m.name,
                    is_visible=m.is_visible,
                    history=[
                        TrendPointSchema(date=p.date, percent_change=p.percent_change)
                        for p in m.history
                    ],
                )
                for m in squad.members
            ],
            your_history=_member_points(squad.your_history),
            metadata=SquadMetadataSchema(**vars(squad.metadata)),
        )

    # ========================================================================
    # Leaderboard
    # ========================================================================

    def get_leaderboard(self, workspace_id: str, user_id: str) -> LeaderboardResponse:
        """Get the privacy-formatted leaderboard of a workspace.

        Only members disclosing an exact value and visible performance are
        ranked, by exact value descending; everyone else is listed after
        them without a rank.
        """
        resolved = self._resolve_members(workspace_id, user_id)

        ranked = []
        unranked = []
        exact_values = []
        returns = []

        for member, effective in resolved:
            holdings = self.store.get_holdings(member.user_id)
            total_value = sum(h.market_value for h in holdings)
            change = sum(h.unrealized_pl for h in holdings)
            change_percent = change / total_value * 100 if total_value > 0 else 0.0

            formatted = format_portfolio_value(total_value, effective.portfolio_value, self.privacy_config)
            performance = performance_beside_value(
                format_performance(change, change_percent, effective.performance),
                formatted,
            )
            positions = filter_positions(holdings, effective.positions)

            if formatted.exact is not None:
                exact_values.append(formatted.exact)
            if performance.visible:
                returns.append(performance.change_percent)

            entry = LeaderboardEntrySchema(
                user_id=member.user_id,
                name=member.user_name,
                is_current_user=member.user_id == user_id,
                disclosure_tier=performance_disclosure_tier(effective).value,
                portfolio_value=FormattedValueSchema.model_validate(formatted.to_dict()),
                performance=PerformanceSchema(
                    change=performance.change,
                    change_percent=performance.change_percent,
                ),
                positions=[PositionSchema.model_validate(p.to_dict()) for p in positions],
                position_count=len(positions),
            )

            if can_rank_in_leaderboard(effective):
                ranked.append((total_value, entry))
            else:
                unranked.append(entry)

        ranked.sort(key=lambda item: item[0], reverse=True)
        entries = []
        for position, (_, entry) in enumerate(ranked, start=1):
            entry.rank = position
            entries.append(entry)
        entries.extend(unranked)

        stats = LeaderboardStatsSchema(
            total_members=len(resolved),
            ranked_members=len(ranked),
            combined_value=float(sum(exact_values)),
            average_return=float(np.mean(returns)) if returns else 0.0,
        )

        logger.info(
            "Built leaderboard",
            extra_data={
                "workspace_id": workspace_id,
                "members": stats.total_members,
                "ranked": stats.ranked_members,
            },
        )

        return LeaderboardResponse(workspace_id=workspace_id, entries=entries, stats=stats)

    # ========================================================================
    # Activity feed
    # ========================================================================

    def get_activity(
        self,
        workspace_id: str,
        user_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> ActivityFeedResponse:
        """Get the privacy-filtered activity feed of a workspace.

        Filtering happens before paging so totals never count entries
        the caller may not see.
        """
        resolved = self._resolve_members(workspace_id, user_id)
        privacy_by_user: Dict[str, EffectivePrivacy] = {
            member.user_id: effective for member, effective in resolved
        }
        names = {member.user_id: member.user_name for member, _ in resolved}

        visible = filter_activities(self.store.get_activities(workspace_id), privacy_by_user.get)
        page = visible[offset:offset + limit]

        items = [
            ActivitySchema(
                id=activity.id,
                user_id=activity.user_id,
                user_name=names.get(activity.user_id),
                type=activity.type.value,
                symbol=activity.symbol,
                quantity=activity.quantity,
                price=activity.price,
                value=activity.value,
                message=activity.message,
                created_at=activity.created_at,
                privacy_level=activity_privacy_level(privacy_by_user[activity.user_id]).value,
            )
            for activity in page
        ]

        return ActivityFeedResponse(
            workspace_id=workspace_id,
            items=items,
            total=len(visible),
            limit=limit,
            offset=offset,
            has_more=offset + len(items) < len(visible),
        )
