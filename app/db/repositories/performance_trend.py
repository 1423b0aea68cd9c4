"""
Performance trend repository.

At most one trend is active per (athlete, trend type, zone).  Emitting a
trend is ``deactivate_active`` followed by ``insert_active`` inside one
unit of work.
"""

from typing import Iterable, Optional

from sqlmodel import Session, select

from app.core.clock import utcnow
from app.core.exceptions import StateConsistencyError
from app.models.performance_trend import PerformanceTrend


class PerformanceTrendRepository:
    """Repository for PerformanceTrend database operations."""

    def __init__(self, session: Session):
        self.session = session

    def _active_statement(self, athlete_id: int, trend_types: Iterable[str], zone: Optional[str]):
        statement = select(PerformanceTrend).where(
            PerformanceTrend.athlete_id == athlete_id,
            PerformanceTrend.is_active == True,  # noqa: E712
            PerformanceTrend.trend_type.in_(list(trend_types)),
        )
        if zone is None:
            return statement.where(PerformanceTrend.zone.is_(None))
        return statement.where(PerformanceTrend.zone == zone)

    def get_active(self, athlete_id: int) -> list[PerformanceTrend]:
        """All active trends, highest confidence first, then newest."""
        statement = (
            select(PerformanceTrend)
            .where(
                PerformanceTrend.athlete_id == athlete_id,
                PerformanceTrend.is_active == True,  # noqa: E712
            )
            .order_by(PerformanceTrend.confidence.desc(), PerformanceTrend.created_at.desc())
        )
        return list(self.session.exec(statement).all())

    def get_active_for_key(
        self, athlete_id: int, trend_type: str, zone: Optional[str] = None,
    ) -> Optional[PerformanceTrend]:
        return self.session.exec(self._active_statement(athlete_id, [trend_type], zone)).first()

    def get_by_athlete(self, athlete_id: int) -> list[PerformanceTrend]:
        """Every trend of an athlete, active or not, oldest first."""
        statement = (
            select(PerformanceTrend)
            .where(PerformanceTrend.athlete_id == athlete_id)
            .order_by(PerformanceTrend.id)
        )
        return list(self.session.exec(statement).all())

    def deactivate_active(
        self, athlete_id: int, trend_types: Iterable[str], zone: Optional[str] = None,
    ) -> int:
        """Deactivate the active trends of the given types / zone.

        Returns:
            Number of trends deactivated.
        """
        trends = list(self.session.exec(self._active_statement(athlete_id, trend_types, zone)).all())
        now = utcnow()
        for trend in trends:
            trend.is_active = False
            trend.updated_at = now
            self.session.add(trend)
        self.session.flush()
        return len(trends)

    def insert_active(self, trend: PerformanceTrend) -> PerformanceTrend:
        """Insert *trend* as the active trend of its key.

        Raises:
            StateConsistencyError: if the key already has an active trend.
        """
        if self.get_active_for_key(trend.athlete_id, trend.trend_type, trend.zone) is not None:
            raise StateConsistencyError(
                f"an active {trend.trend_type} trend already exists (zone={trend.zone})",
                trend.athlete_id,
            )
        trend.is_active = True
        self.session.add(trend)
        self.session.flush()
        return trend
