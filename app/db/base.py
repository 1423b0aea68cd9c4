"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.adaptation_settings import AdaptationSettings  # noqa: F401
from app.models.benchmark import BenchmarkRecord  # noqa: F401
from app.models.performance_trend import PerformanceTrend  # noqa: F401
from app.models.progression import ProgressionHistoryEntry, ProgressionLevel  # noqa: F401
from app.models.ride import RideSummary  # noqa: F401
from app.models.training_zone import TrainingZone  # noqa: F401
