"""
Benchmark record database model.

One row per benchmark test (FTP and optionally LTHR).  History is
append-only: a superseded record only ever has its ``is_current`` flag
cleared.  At most one ``is_current`` row exists per athlete; the
repository enforces it and the partial unique index backs it up.
"""

import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, text
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class BenchmarkRecord(SQLModel, table=True):
    """A single FTP / LTHR benchmark for an athlete."""

    __tablename__ = "benchmark_records"
    __table_args__ = (
        Index("uq_benchmark_one_current_per_athlete", "athlete_id", unique=True,
              postgresql_where=text("is_current"), sqlite_where=text("is_current = 1"), ),
        Index("ix_benchmark_athlete_test_date", "athlete_id", "test_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(nullable=False, index=True)

    ftp_watts: int = Field(nullable=False)
    lthr_bpm: Optional[int] = Field(default=None)

    test_date: datetime.date = Field(nullable=False)
    test_method: str = Field(default="manual", max_length=50, nullable=False)

    # Activity the test was ridden in, if any
    source_activity_id: Optional[int] = Field(default=None)
    notes: Optional[str] = Field(default=None, max_length=1000)

    is_current: bool = Field(default=True, nullable=False)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
