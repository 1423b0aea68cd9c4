"""
Adaptation settings repository.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.adaptation_settings import AdaptationSettings


class AdaptationSettingsRepository:
    """Repository for AdaptationSettings database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_athlete(self, athlete_id: int) -> Optional[AdaptationSettings]:
        statement = select(AdaptationSettings).where(AdaptationSettings.athlete_id == athlete_id)
        return self.session.exec(statement).first()

    def create(self, settings: AdaptationSettings) -> AdaptationSettings:
        self.session.add(settings)
        self.session.flush()
        return settings
