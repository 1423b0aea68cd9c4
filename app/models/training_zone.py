"""
Training zone database model.

Zones are fully derived from the current benchmark and are replaced as a
set of seven whenever a new benchmark becomes current.
"""

import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class TrainingZone(SQLModel, table=True):
    """One of the seven power / heart-rate zones of an athlete."""

    __tablename__ = "training_zones"
    __table_args__ = (UniqueConstraint("athlete_id", "zone_name", name="uq_training_zone_athlete_zone"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(nullable=False, index=True)
    zone_name: str = Field(nullable=False, max_length=50)
    zone_number: int = Field(nullable=False)

    # Power band (watts)
    power_min: int = Field(nullable=False)
    power_max: int = Field(nullable=False)

    # Heart-rate band (bpm), unset without LTHR
    hr_min: Optional[int] = Field(default=None)
    hr_max: Optional[int] = Field(default=None)

    # Percent of FTP / LTHR
    ftp_percent_min: int = Field(nullable=False)
    ftp_percent_max: int = Field(nullable=False)
    lthr_percent_min: int = Field(nullable=False)
    lthr_percent_max: int = Field(nullable=False)

    description: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
