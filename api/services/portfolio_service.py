"""Portfolio service for the caller's own sampled history."""

from datetime import date
from typing import Optional, Tuple

from api.middleware.error_handler import NotFoundError
from api.schemas.portfolio import PortfolioHistoryResponse, SamplePointSchema
from config.history import HistoryConfig
from history.periods import TimePeriod, period_start
from history.sampler import SampledHistory, TimeSeriesSampler, resolve_join_date
from persistence.store import SquadStore
from utils.logger import get_api_logger

logger = get_api_logger()


class PortfolioService:
    """Service for personal portfolio history."""

    def __init__(self, store: SquadStore, history_config: Optional[HistoryConfig] = None):
        """Initialize portfolio service.

        Args:
            store: Database store
            history_config: Sampling configuration (defaults if None)
        """
        self.store = store
        self.sampler = TimeSeriesSampler(history_config)

    def join_date(self, user_id: str, today: date) -> date:
        """First day the user has portfolio data (first connection or snapshot)."""
        return resolve_join_date(
            self.store.first_connection_date(user_id),
            self.store.first_snapshot_date(user_id),
            today=today,
        )

    def sample_user(
        self,
        user_id: str,
        period: TimePeriod,
        today: date,
    ) -> Tuple[SampledHistory, date]:
        """Sample one user's snapshots for a period.

        Returns:
            (sampled history, join date)
        """
        joined = self.join_date(user_id, today)
        since = max(period_start(period, today), joined)
        snapshots = self.store.get_snapshots(user_id, since=since)
        return self.sampler.sample(snapshots, period, joined, now=today), joined

    def get_history(
        self,
        user_id: str,
        period: TimePeriod,
        today: Optional[date] = None,
    ) -> PortfolioHistoryResponse:
        """Get the caller's sampled history.

        Args:
            user_id: Caller
            period: Look-back period
            today: Reference day (defaults to the current date)

        Returns:
            Sampled points with coverage and data quality
        """
        if self.store.get_user(user_id) is None:
            raise NotFoundError(f"User {user_id} not found", detail={"user_id": user_id})

        today = today or date.today()
        history, joined = self.sample_user(user_id, period, today)

        if history.actual_count == 0:
            logger.info(
                "No snapshots in requested period",
                extra_data={"user_id": user_id, "period": period.value},
            )

        return PortfolioHistoryResponse(
            period=period.value,
            join_date=joined,
            points=[
                SamplePointSchema(
                    date=p.date,
                    value=p.value,
                    pl=p.pl,
                    pl_percent=p.pl_percent,
                    is_interpolated=p.is_interpolated,
                )
                for p in history.points
            ],
            actual_count=history.actual_count,
            total_count=history.total_count,
            coverage=history.coverage,
            data_quality=history.quality.value,
        )
