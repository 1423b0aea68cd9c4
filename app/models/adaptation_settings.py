"""
Adaptation settings model.

Per-athlete preferences for adaptive training.  Owned and created by the
surrounding product; the engine only reads them.
"""

import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class AdaptationSettings(SQLModel, table=True):
    """An athlete's adaptive-training configuration.  One row per athlete."""

    __tablename__ = "adaptation_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(nullable=False, unique=True, index=True)

    adaptive_enabled: bool = Field(default=True)
    # If false, adaptations require approval
    auto_apply: bool = Field(default=False)
    # conservative / moderate / aggressive
    sensitivity: str = Field(default="moderate", max_length=20)

    # Minimum lead time before a planned workout may be altered
    min_days_before_workout: int = Field(default=2, ge=0)

    # Training Stress Balance thresholds
    tsb_fatigued_threshold: float = Field(default=-30.0)
    tsb_fresh_threshold: float = Field(default=5.0)

    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
