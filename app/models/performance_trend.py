"""
Performance trend database model.

Trends are never updated in place: a detection run deactivates the prior
active trend of the same key and inserts a new row, so the evolution of
a trend is kept in the deactivated rows.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column, DateTime, Index
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class PerformanceTrend(SQLModel, table=True):
    """A directional, confidence-scored inference over a history window."""

    __tablename__ = "performance_trends"
    __table_args__ = (Index("ix_performance_trends_athlete_active", "athlete_id", "trend_type", "is_active"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(nullable=False, index=True)

    trend_type: str = Field(nullable=False, max_length=50)
    zone: Optional[str] = Field(default=None, max_length=50)
    direction: str = Field(nullable=False, max_length=20)

    confidence: float = Field(nullable=False)
    start_date: datetime.date = Field(nullable=False)
    end_date: datetime.date = Field(nullable=False)
    value_change: float = Field(default=0.0, nullable=False)
    value_change_percent: Optional[float] = Field(default=None)
    sample_count: int = Field(default=0, nullable=False)

    # Trend-specific supporting figures
    metrics: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )

    is_active: bool = Field(default=True, nullable=False)

    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
