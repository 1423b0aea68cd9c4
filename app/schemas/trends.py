"""
Performance trend schemas.

Trend types:

- ``ftp_improvement`` / ``ftp_decline``: estimated threshold power vs. current FTP
- ``volume_increase`` / ``volume_decrease``: weekly TSS, recent vs. baseline half
- ``zone_fitness``: summed progression deltas of one zone
"""

import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

TrendType = Literal["ftp_improvement", "ftp_decline", "volume_increase", "volume_decrease", "zone_fitness"]
Direction = Literal["improving", "declining", "stable"]


class TrendCandidate(BaseModel):
    """A significant trend produced by a detector, not yet persisted."""

    trend_type: TrendType
    zone: Optional[str] = None
    direction: Direction
    confidence: float = Field(..., ge=0.0, le=1.0)
    start_date: datetime.date
    end_date: datetime.date
    value_change: float
    value_change_percent: Optional[float] = None
    sample_count: int = Field(..., ge=0)
    metrics: dict[str, Any] = Field(default_factory=dict)


class TrendDetectionSummary(BaseModel):
    """What a detection run produced, so callers need not re-query."""

    trend_count: int = Field(..., ge=0)
    ftp_trend_id: Optional[int] = None
    zone_trend_ids: list[int] = Field(default_factory=list)
    volume_trend_id: Optional[int] = None


class ActiveTrendResponse(BaseModel):
    """An active trend with a human-readable description."""

    id: int
    trend_type: str
    zone: Optional[str]
    direction: str
    confidence: float
    description: str
    value_change: float
    value_change_percent: Optional[float]
    sample_count: int
    start_date: datetime.date
    days_active: int
    metrics: dict[str, Any] = Field(default_factory=dict)
