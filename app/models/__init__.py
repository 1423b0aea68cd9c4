"""SQLModel database models."""

from app.models.adaptation_settings import AdaptationSettings
from app.models.benchmark import BenchmarkRecord
from app.models.performance_trend import PerformanceTrend
from app.models.progression import ProgressionHistoryEntry, ProgressionLevel
from app.models.ride import RideSummary
from app.models.training_zone import TrainingZone

__all__ = [
    "AdaptationSettings",
    "BenchmarkRecord",
    "PerformanceTrend",
    "ProgressionHistoryEntry",
    "ProgressionLevel",
    "RideSummary",
    "TrainingZone",
]
