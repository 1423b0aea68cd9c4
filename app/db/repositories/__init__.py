"""Database repositories."""

from app.db.repositories.adaptation_settings import AdaptationSettingsRepository
from app.db.repositories.benchmark import BenchmarkRepository
from app.db.repositories.performance_trend import PerformanceTrendRepository
from app.db.repositories.progression import ProgressionRepository
from app.db.repositories.ride import RideRepository
from app.db.repositories.training_zone import TrainingZoneRepository

__all__ = [
    "AdaptationSettingsRepository",
    "BenchmarkRepository",
    "PerformanceTrendRepository",
    "ProgressionRepository",
    "RideRepository",
    "TrainingZoneRepository",
]
