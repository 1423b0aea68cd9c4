"""
Adaptation settings read model.

Defaults here are the documented fallback used when an athlete has no
settings row.
"""

from typing import Literal

from pydantic import BaseModel, Field

Sensitivity = Literal["conservative", "moderate", "aggressive"]


class AdaptationSettingsRead(BaseModel):
    """Effective adaptation settings of an athlete."""

    adaptive_enabled: bool = True
    auto_apply: bool = False
    sensitivity: Sensitivity = "moderate"
    min_days_before_workout: int = Field(2, ge=0)
    tsb_fatigued_threshold: float = -30.0
    tsb_fresh_threshold: float = 5.0
    is_default: bool = Field(False, description="True when no settings row exists for the athlete")

    class Config:
        from_attributes = True
