"""
Benchmark repository.

Handles database operations for BenchmarkRecord.  Writes only flush;
the caller's :class:`~app.db.unit_of_work.UnitOfWork` commits.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.exceptions import StateConsistencyError
from app.models.benchmark import BenchmarkRecord


class BenchmarkRepository:
    """Repository for BenchmarkRecord database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_current(self, athlete_id: int) -> Optional[BenchmarkRecord]:
        statement = select(BenchmarkRecord).where(
            BenchmarkRecord.athlete_id == athlete_id,
            BenchmarkRecord.is_current == True,  # noqa: E712
        )
        return self.session.exec(statement).first()

    def get_history(self, athlete_id: int, limit: int = 50) -> list[BenchmarkRecord]:
        """All benchmarks of an athlete, most recent test first."""
        statement = (
            select(BenchmarkRecord)
            .where(BenchmarkRecord.athlete_id == athlete_id)
            .order_by(BenchmarkRecord.test_date.desc(), BenchmarkRecord.id.desc())
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def demote_current(self, athlete_id: int) -> Optional[BenchmarkRecord]:
        """Clear the current flag of the athlete's current benchmark, if any."""
        current = self.get_current(athlete_id)
        if current is None:
            return None
        current.is_current = False
        self.session.add(current)
        self.session.flush()
        return current

    def insert_current(self, record: BenchmarkRecord) -> BenchmarkRecord:
        """Insert *record* as the athlete's current benchmark.

        Raises:
            StateConsistencyError: if another current benchmark exists.
        """
        if self.get_current(record.athlete_id) is not None:
            raise StateConsistencyError("a current benchmark already exists", record.athlete_id)

        record.is_current = True
        self.session.add(record)
        try:
            self.session.flush()
        except IntegrityError as e:
            raise StateConsistencyError("a current benchmark already exists", record.athlete_id) from e
        return record
