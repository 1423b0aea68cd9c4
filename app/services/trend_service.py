"""
Trend service.

Runs trend detection for an athlete and presents the active trends with
human-readable descriptions.
"""

import datetime
from typing import Optional

from sqlmodel import Session

from app.core.clock import utc_date, utcnow
from app.db.repositories.performance_trend import PerformanceTrendRepository
from app.intelligence.trends import detect_all_trends
from app.models.performance_trend import PerformanceTrend
from app.schemas.trends import ActiveTrendResponse, TrendDetectionSummary


class TrendService:
    """Service for performance trends."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = PerformanceTrendRepository(session)

    def detect_all_trends(self, athlete_id: int, lookback_days: int = 28,
                          as_of: Optional[datetime.date] = None, ) -> TrendDetectionSummary:
        return detect_all_trends(self.session, athlete_id, as_of=as_of, lookback_days=lookback_days)

    def get_active_trends(self, athlete_id: int, as_of: Optional[datetime.date] = None) -> list[ActiveTrendResponse]:
        """Active trends, highest confidence first, then newest."""
        as_of = as_of or utcnow().date()
        return [
            ActiveTrendResponse(id=t.id, trend_type=t.trend_type, zone=t.zone, direction=t.direction,
                                confidence=t.confidence, description=describe_trend(t), value_change=t.value_change,
                                value_change_percent=t.value_change_percent, sample_count=t.sample_count,
                                start_date=t.start_date, days_active=max((as_of - utc_date(t.created_at)).days, 0),
                                metrics=dict(t.metrics or {}), )
            for t in self.repository.get_active(athlete_id)
        ]


def _signed(value: float, fmt: str) -> str:
    return f"{'+' if value >= 0 else ''}{value:{fmt}}"


def describe_trend(trend: PerformanceTrend) -> str:
    """One-line description of a trend, e.g. ``FTP trending up +15W (+6.0%)``."""
    pct = trend.value_change_percent or 0.0

    if trend.trend_type in ("ftp_improvement", "ftp_decline"):
        word = "up" if trend.trend_type == "ftp_improvement" else "down"
        return f"FTP trending {word} {_signed(round(trend.value_change), 'd')}W ({_signed(pct, '.1f')}%)"

    if trend.trend_type in ("volume_increase", "volume_decrease"):
        word = "up" if trend.trend_type == "volume_increase" else "down"
        return (f"Training volume {word} {_signed(round(trend.value_change), 'd')} TSS/week "
                f"({_signed(pct, '.1f')}%)")

    if trend.trend_type == "zone_fitness":
        zone = (trend.zone or "zone").replace("_", " ").capitalize()
        return f"{zone} fitness {trend.direction} ({_signed(trend.value_change, '.1f')} levels)"

    return f"{trend.trend_type} {trend.direction}"
