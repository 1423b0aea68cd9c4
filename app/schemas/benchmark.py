"""
Benchmark schemas.

Numeric ranges (FTP 1-599 W, LTHR 1-219 bpm) are checked by the zone
calculator, which raises :class:`~app.core.exceptions.InvalidBenchmarkError`
with the athlete id attached, so they are not duplicated as field
constraints here.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TestMethod = Literal["ramp", "20min", "8min", "auto_detected", "manual"]


class BenchmarkCreate(BaseModel):
    """Input for a new benchmark test."""

    ftp_watts: int = Field(..., description="Functional Threshold Power (W)")
    lthr_bpm: Optional[int] = Field(None, description="Lactate-threshold heart rate (bpm)")
    test_date: datetime.date = Field(default_factory=datetime.date.today)
    test_method: TestMethod = Field("manual", description="How the benchmark was obtained")
    source_activity_id: Optional[int] = Field(None, description="Activity the test was ridden in")
    notes: Optional[str] = Field(None, max_length=1000)


class BenchmarkResponse(BaseModel):
    """A stored benchmark record."""

    id: int
    athlete_id: int
    ftp_watts: int
    lthr_bpm: Optional[int]
    test_date: datetime.date
    test_method: str
    source_activity_id: Optional[int]
    is_current: bool
    created_at: datetime.datetime

    class Config:
        from_attributes = True
