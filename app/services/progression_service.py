"""
Progression service.

Applies workout outcomes to per-zone progression levels.  The level
update, the workout counter and the history entry are written in one
unit of work: all three or none.
"""

import datetime
import logging
from collections import defaultdict
from typing import Iterable, Optional

from sqlmodel import Session

from app.core.clock import as_utc, utcnow
from app.db.repositories.progression import ProgressionRepository
from app.db.unit_of_work import UnitOfWork
from app.intelligence.progression import BASELINE_LEVEL, compute_adjustment, seed_level_from_rpe
from app.intelligence.zones import ZONE_NAMES, zone_number
from app.models.progression import ProgressionHistoryEntry
from app.schemas.progression import ProgressionHistoryResponse, ProgressionLevelResponse, WorkoutOutcome

logger = logging.getLogger(__name__)


class ProgressionService:
    """Service for progression levels and their history."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = ProgressionRepository(session)

    # ------------------------------------------------------------------
    # Workout outcomes
    # ------------------------------------------------------------------

    def apply_workout_outcome(self, athlete_id: int, outcome: WorkoutOutcome) -> float:
        """Adjust the level of the outcome's zone.

        A zone without a level starts at the 3.0 baseline.

        Returns:
            The new level.

        Raises:
            ValueError: unknown zone name.
        """
        zone_number(outcome.zone)
        completed_at = as_utc(outcome.completed_at) if outcome.completed_at else utcnow()

        with UnitOfWork(self.session):
            level = self.repository.get_or_create(athlete_id, outcome.zone, BASELINE_LEVEL)
            adjustment = compute_adjustment(outcome.completion_pct, outcome.perceived_exertion,
                                            outcome.workout_level, level.level, )

            level.level = adjustment.new_level
            level.last_level_change = adjustment.delta
            level.last_level_change_at = completed_at
            level.workouts_completed += 1
            level.last_workout_date = completed_at.date()
            self.repository.save(level)

            self.repository.append_history(
                ProgressionHistoryEntry(athlete_id=athlete_id, zone=outcome.zone, old_level=adjustment.old_level,
                                        new_level=adjustment.new_level, level_change=adjustment.delta,
                                        reason=adjustment.reason, source_activity_id=outcome.source_activity_id,
                                        planned_workout_id=outcome.planned_workout_id, created_at=completed_at, ))

        logger.info("Athlete %s: %s level %.2f -> %.2f (%s%s)", athlete_id, outcome.zone, adjustment.old_level,
                    adjustment.new_level, adjustment.reason, ", damped" if adjustment.damped else "", )
        return adjustment.new_level

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_progression_levels(self, athlete_id: int) -> list[ProgressionLevelResponse]:
        """Levels of all seven zones in zone order; missing zones at baseline."""
        stored = {level.zone: level for level in self.repository.get_all(athlete_id)}
        result = []
        for zone in ZONE_NAMES:
            if zone in stored:
                result.append(ProgressionLevelResponse.model_validate(stored[zone]))
            else:
                result.append(ProgressionLevelResponse(zone=zone, level=BASELINE_LEVEL, workouts_completed=0))
        return result

    def get_progression_history(self, athlete_id: int, zone: Optional[str] = None,
                                days_back: int = 90, ) -> list[ProgressionHistoryResponse]:
        """History entries of the last *days_back* days, newest first."""
        if zone is not None:
            zone_number(zone)
        since = utcnow() - datetime.timedelta(days=days_back)
        entries = self.repository.get_history(athlete_id, zone=zone, since=since)
        return [ProgressionHistoryResponse.model_validate(e) for e in entries]

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def initialize_levels(self, athlete_id: int) -> int:
        """Create every missing zone level at baseline.

        Returns:
            Number of levels created.
        """
        created = 0
        with UnitOfWork(self.session):
            for zone in ZONE_NAMES:
                if self.repository.get(athlete_id, zone) is None:
                    self.repository.create(athlete_id, zone, BASELINE_LEVEL)
                    created += 1
        return created

    def reseed_from_rpe(self, athlete_id: int, samples: Iterable[tuple[str, float]]) -> int:
        """Bootstrap levels from historical ``(zone, rpe)`` samples.

        Each sampled zone gets the level band of its average RPE and a
        workout count equal to its sample count; zones without samples are
        initialized at baseline.  No history entries are written.

        Returns:
            Number of zones seeded from samples.
        """
        rpe_by_zone: dict[str, list[float]] = defaultdict(list)
        for zone, rpe in samples:
            zone_number(zone)
            rpe_by_zone[zone].append(rpe)

        with UnitOfWork(self.session):
            for zone, values in rpe_by_zone.items():
                level = self.repository.get_or_create(athlete_id, zone, BASELINE_LEVEL)
                level.level = seed_level_from_rpe(sum(values) / len(values))
                level.workouts_completed = len(values)
                self.repository.save(level)

            for zone in ZONE_NAMES:
                if zone not in rpe_by_zone:
                    self.repository.get_or_create(athlete_id, zone, BASELINE_LEVEL)

        logger.info("Athlete %s: reseeded %d zone(s) from RPE history", athlete_id, len(rpe_by_zone))
        return len(rpe_by_zone)
