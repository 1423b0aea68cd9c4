"""
Training zone repository.
"""

from sqlmodel import Session, select

from app.models.training_zone import TrainingZone
from app.schemas.zones import ZoneBand


class TrainingZoneRepository:
    """Repository for TrainingZone database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_athlete(self, athlete_id: int) -> list[TrainingZone]:
        statement = (
            select(TrainingZone)
            .where(TrainingZone.athlete_id == athlete_id)
            .order_by(TrainingZone.zone_number)
        )
        return list(self.session.exec(statement).all())

    def replace_all(self, athlete_id: int, bands: list[ZoneBand]) -> list[TrainingZone]:
        """Swap the athlete's zone set for *bands* (delete, then insert)."""
        for zone in self.get_by_athlete(athlete_id):
            self.session.delete(zone)
        self.session.flush()

        zones = [TrainingZone(athlete_id=athlete_id, **band.model_dump()) for band in bands]
        self.session.add_all(zones)
        self.session.flush()
        return zones
