"""
Benchmark service.

Setting a benchmark is one atomic unit: demote the prior current record,
insert the new one, and replace the seven training zones derived from it.
Inputs are validated before anything is written.
"""

import logging
from typing import Optional

from sqlmodel import Session

from app.db.repositories.benchmark import BenchmarkRepository
from app.db.repositories.training_zone import TrainingZoneRepository
from app.db.unit_of_work import UnitOfWork
from app.intelligence.zones import compute_zones, validate_benchmark
from app.models.benchmark import BenchmarkRecord
from app.schemas.benchmark import BenchmarkCreate, BenchmarkResponse
from app.schemas.zones import ZoneBand

logger = logging.getLogger(__name__)


class BenchmarkService:
    """Service for benchmarks and the training zones derived from them."""

    def __init__(self, session: Session):
        self.session = session
        self.benchmark_repo = BenchmarkRepository(session)
        self.zone_repo = TrainingZoneRepository(session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_current_benchmark(self, athlete_id: int, data: BenchmarkCreate) -> list[ZoneBand]:
        """Record a new current benchmark and recompute the athlete's zones.

        Returns:
            The seven new zones, in zone order.

        Raises:
            InvalidBenchmarkError: FTP or LTHR out of range (nothing written).
            StateConsistencyError: a concurrent writer created another
                current benchmark (nothing written).
        """
        validate_benchmark(data.ftp_watts, data.lthr_bpm, athlete_id)
        bands = compute_zones(data.ftp_watts, data.lthr_bpm)

        with UnitOfWork(self.session):
            previous = self.benchmark_repo.demote_current(athlete_id)
            record = BenchmarkRecord(athlete_id=athlete_id, **data.model_dump())
            self.benchmark_repo.insert_current(record)
            self.zone_repo.replace_all(athlete_id, bands)

        logger.info("Athlete %s: FTP %s -> %d W (LTHR %s, %s)", athlete_id,
                    previous.ftp_watts if previous else "none", data.ftp_watts, data.lthr_bpm, data.test_method, )
        return bands

    def get_current_benchmark(self, athlete_id: int) -> Optional[BenchmarkResponse]:
        record = self.benchmark_repo.get_current(athlete_id)
        return BenchmarkResponse.model_validate(record) if record else None

    def get_current_zones(self, athlete_id: int) -> list[ZoneBand]:
        """Stored zones of the athlete; empty before the first benchmark."""
        return [ZoneBand.model_validate(zone) for zone in self.zone_repo.get_by_athlete(athlete_id)]

    def get_benchmark_history(self, athlete_id: int, limit: int = 50) -> list[BenchmarkResponse]:
        return [BenchmarkResponse.model_validate(r) for r in self.benchmark_repo.get_history(athlete_id, limit)]
