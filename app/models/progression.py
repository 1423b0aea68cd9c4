"""
Progression level database models.

:class:`ProgressionLevel` holds the current 1-10 fitness level of an
athlete in one training zone.  :class:`ProgressionHistoryEntry` is the
append-only audit trail: one row per level transition, written in the
same transaction as the level update it documents.
"""

import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class ProgressionLevel(SQLModel, table=True):
    """Current fitness level of an athlete in a single zone."""

    __tablename__ = "progression_levels"
    __table_args__ = (UniqueConstraint("athlete_id", "zone", name="uq_progression_athlete_zone"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(nullable=False, index=True)
    zone: str = Field(nullable=False, max_length=50)

    level: float = Field(default=3.0, nullable=False)
    workouts_completed: int = Field(default=0, nullable=False)
    last_workout_date: Optional[datetime.date] = Field(default=None)

    last_level_change: Optional[float] = Field(default=None)
    last_level_change_at: Optional[datetime.datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class ProgressionHistoryEntry(SQLModel, table=True):
    """Immutable record of one progression level transition."""

    __tablename__ = "progression_level_history"
    __table_args__ = (Index("ix_progression_history_athlete_zone_created", "athlete_id", "zone", "created_at"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(nullable=False, index=True)
    zone: str = Field(nullable=False, max_length=50)

    old_level: float = Field(nullable=False)
    new_level: float = Field(nullable=False)
    level_change: float = Field(nullable=False)
    reason: str = Field(nullable=False, max_length=100)

    source_activity_id: Optional[int] = Field(default=None)
    planned_workout_id: Optional[int] = Field(default=None)

    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
