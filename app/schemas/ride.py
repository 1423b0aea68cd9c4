"""
Ride summary and training-form schemas.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TssMethod = Literal["power", "heuristic"]


class RideSummaryCreate(BaseModel):
    """Materialized figures of one recorded ride."""

    recorded_at: datetime.datetime
    duration_seconds: int = Field(..., ge=1, le=86400)
    average_power: Optional[float] = Field(None, ge=0.0, le=2500.0, description="Average power (W)")
    normalized_power: Optional[float] = Field(None, ge=0.0, le=2500.0, description="Normalized power (W)")
    peak_20min_power: Optional[float] = Field(None, ge=0.0, le=2500.0, description="Best 20-minute power (W)")
    elevation_gain_m: float = Field(0.0, ge=0.0, le=20000.0)
    workout_category: Optional[str] = Field(None, max_length=50, description="e.g. endurance, hill_repeats")
    zone: Optional[str] = Field(None, description="Zone classification, if already known")
    source_activity_id: Optional[int] = None


class RideSummaryResponse(BaseModel):
    """A stored ride summary with its estimated load."""

    id: int
    athlete_id: int
    recorded_at: datetime.datetime
    duration_seconds: int
    normalized_power: Optional[float]
    zone: Optional[str]
    tss: Optional[int]
    tss_method: Optional[str]

    class Config:
        from_attributes = True


class TssEstimate(BaseModel):
    """Training Stress Score and the algorithm that produced it."""

    tss: int = Field(..., ge=0)
    method: TssMethod
    intensity_factor: Optional[float] = None


class TrainingFormResponse(BaseModel):
    """Performance-management snapshot (fitness, fatigue, form)."""

    as_of: datetime.date
    ctl: int = Field(..., description="Chronic training load (42-day)")
    atl: int = Field(..., description="Acute training load (7-day)")
    tsb: int = Field(..., description="Training stress balance, CTL - ATL")
    status: Literal["very_fatigued", "fatigued", "balanced", "fresh"]
    fatigued_threshold: float
    fresh_threshold: float
