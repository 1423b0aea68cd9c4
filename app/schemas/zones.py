"""
Training zone schemas.

A :class:`ZoneBand` is the pure output of the zone calculator; the
persisted :class:`~app.models.training_zone.TrainingZone` rows carry the
same fields plus the athlete id.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ZoneBand(BaseModel):
    """Power / heart-rate band of one training zone."""

    zone_name: str = Field(..., description="recovery, endurance, tempo, sweet_spot, threshold, vo2max, anaerobic")
    zone_number: int = Field(..., ge=1, le=7)

    power_min: int = Field(..., ge=0, description="Lower power bound (W)")
    power_max: int = Field(..., ge=0, description="Upper power bound (W)")
    hr_min: Optional[int] = Field(None, ge=0, description="Lower heart-rate bound (bpm), unset without LTHR")
    hr_max: Optional[int] = Field(None, ge=0, description="Upper heart-rate bound (bpm), unset without LTHR")

    ftp_percent_min: int = Field(..., ge=0, le=200)
    ftp_percent_max: int = Field(..., ge=0, le=200)
    lthr_percent_min: int = Field(..., ge=0, le=120)
    lthr_percent_max: int = Field(..., ge=0, le=120)

    description: Optional[str] = None

    class Config:
        from_attributes = True
