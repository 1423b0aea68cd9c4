"""
Adaptation settings service.

Settings are owned by the surrounding product.  An athlete without a
settings row is not an error: the documented defaults apply.
"""

import logging

from sqlmodel import Session

from app.db.repositories.adaptation_settings import AdaptationSettingsRepository
from app.schemas.adaptation_settings import AdaptationSettingsRead

logger = logging.getLogger(__name__)


class AdaptationSettingsService:
    """Read-only access to an athlete's adaptation settings."""

    def __init__(self, session: Session):
        self.repository = AdaptationSettingsRepository(session)

    def resolve(self, athlete_id: int) -> AdaptationSettingsRead:
        settings = self.repository.get_by_athlete(athlete_id)
        if settings is None:
            logger.info("Athlete %s has no adaptation settings, using defaults", athlete_id)
            return AdaptationSettingsRead(is_default=True)
        return AdaptationSettingsRead.model_validate(settings)
