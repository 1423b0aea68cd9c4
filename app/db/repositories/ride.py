"""
Ride summary repository.
"""

import datetime

from sqlmodel import Session, select

from app.models.ride import RideSummary


class RideRepository:
    """Repository for RideSummary database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, ride: RideSummary) -> RideSummary:
        self.session.add(ride)
        self.session.flush()
        return ride

    def get_by_athlete_range(
        self, athlete_id: int, start: datetime.datetime, end: datetime.datetime,
    ) -> list[RideSummary]:
        """Rides recorded within ``[start, end]``, oldest first."""
        statement = (
            select(RideSummary)
            .where(
                RideSummary.athlete_id == athlete_id,
                RideSummary.recorded_at >= start,
                RideSummary.recorded_at <= end,
            )
            .order_by(RideSummary.recorded_at)
        )
        return list(self.session.exec(statement).all())
