"""
Progression level schemas.

:class:`WorkoutOutcome` is what the workout-completion side hands over
after a workout; the rest are read models.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

AdjustmentReason = Literal["workout_success", "workout_struggle", "workout_failure", "no_change"]


class WorkoutOutcome(BaseModel):
    """Outcome of one completed workout targeting a single zone."""

    zone: str = Field(..., description="Target training zone")
    workout_level: float = Field(..., ge=1.0, le=10.0, description="Difficulty level of the workout (1-10)")
    completion_pct: float = Field(..., ge=0.0, le=100.0, description="Share of the workout completed (%)")
    perceived_exertion: float = Field(..., ge=1.0, le=10.0, description="Athlete-reported RPE (1-10)")
    source_activity_id: Optional[int] = Field(None, description="Recorded activity of the workout")
    planned_workout_id: Optional[int] = Field(None, description="Planned workout that was executed")
    completed_at: Optional[datetime.datetime] = Field(None, description="Completion time (defaults to now)")


class LevelAdjustment(BaseModel):
    """Result of the bounded-adjustment policy for one workout."""

    base_delta: float
    delta: float
    level_diff: float
    damped: bool
    reason: AdjustmentReason
    old_level: float
    new_level: float


class ProgressionLevelResponse(BaseModel):
    """Current level of an athlete in one zone."""

    zone: str
    level: float
    workouts_completed: int
    last_workout_date: Optional[datetime.date] = None
    last_level_change: Optional[float] = None
    last_level_change_at: Optional[datetime.datetime] = None

    class Config:
        from_attributes = True


class ProgressionHistoryResponse(BaseModel):
    """One audited level transition."""

    id: int
    zone: str
    old_level: float
    new_level: float
    level_change: float
    reason: str
    source_activity_id: Optional[int] = None
    planned_workout_id: Optional[int] = None
    created_at: datetime.datetime

    class Config:
        from_attributes = True
