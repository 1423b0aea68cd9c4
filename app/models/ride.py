"""
Ride summary database model.

Materialized per-ride figures handed over by the activity import side.
The engine adds the estimated TSS and, when possible, the zone the ride
was classified into; these rows feed FTP and volume trend detection.
"""

import datetime
from typing import Optional

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class RideSummary(SQLModel, table=True):
    """Summary of one recorded ride."""

    __tablename__ = "ride_summaries"
    __table_args__ = (Index("ix_ride_summaries_athlete_recorded", "athlete_id", "recorded_at"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(nullable=False, index=True)
    recorded_at: datetime.datetime = Field(nullable=False, sa_type=DateTime(timezone=True))

    duration_seconds: int = Field(nullable=False)
    average_power: Optional[float] = Field(default=None)
    normalized_power: Optional[float] = Field(default=None)
    peak_20min_power: Optional[float] = Field(default=None)
    elevation_gain_m: float = Field(default=0.0, nullable=False)

    # Workout category used by the heuristic TSS (e.g. "tempo", "hill_repeats")
    workout_category: Optional[str] = Field(default=None, max_length=50)
    # Training zone the ride was classified into
    zone: Optional[str] = Field(default=None, max_length=50)

    tss: Optional[int] = Field(default=None)
    tss_method: Optional[str] = Field(default=None, max_length=20)

    source_activity_id: Optional[int] = Field(default=None)

    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
