"""
Progression repository.

Handles ProgressionLevel and its append-only ProgressionHistoryEntry
trail.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.core.clock import utcnow
from app.models.progression import ProgressionHistoryEntry, ProgressionLevel


class ProgressionRepository:
    """Repository for progression levels and their history."""

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------

    def get(self, athlete_id: int, zone: str) -> Optional[ProgressionLevel]:
        statement = select(ProgressionLevel).where(
            ProgressionLevel.athlete_id == athlete_id,
            ProgressionLevel.zone == zone,
        )
        return self.session.exec(statement).first()

    def get_all(self, athlete_id: int) -> list[ProgressionLevel]:
        statement = (
            select(ProgressionLevel)
            .where(ProgressionLevel.athlete_id == athlete_id)
            .order_by(ProgressionLevel.id)
        )
        return list(self.session.exec(statement).all())

    def create(self, athlete_id: int, zone: str, level: float) -> ProgressionLevel:
        entry = ProgressionLevel(athlete_id=athlete_id, zone=zone, level=level)
        self.session.add(entry)
        self.session.flush()
        return entry

    def get_or_create(self, athlete_id: int, zone: str, level: float) -> ProgressionLevel:
        """Existing level of the zone, or a new one at *level*."""
        return self.get(athlete_id, zone) or self.create(athlete_id, zone, level)

    def save(self, entry: ProgressionLevel) -> ProgressionLevel:
        entry.updated_at = utcnow()
        self.session.add(entry)
        self.session.flush()
        return entry

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def append_history(self, entry: ProgressionHistoryEntry) -> ProgressionHistoryEntry:
        self.session.add(entry)
        self.session.flush()
        return entry

    def get_history(
        self,
        athlete_id: int,
        zone: Optional[str] = None,
        since: Optional[datetime.datetime] = None,
        until: Optional[datetime.datetime] = None,
    ) -> list[ProgressionHistoryEntry]:
        """History entries, newest first, optionally filtered by zone and time."""
        statement = select(ProgressionHistoryEntry).where(ProgressionHistoryEntry.athlete_id == athlete_id)
        if zone is not None:
            statement = statement.where(ProgressionHistoryEntry.zone == zone)
        if since is not None:
            statement = statement.where(ProgressionHistoryEntry.created_at >= since)
        if until is not None:
            statement = statement.where(ProgressionHistoryEntry.created_at <= until)
        statement = statement.order_by(
            ProgressionHistoryEntry.created_at.desc(),
            ProgressionHistoryEntry.id.desc(),
        )
        return list(self.session.exec(statement).all())
