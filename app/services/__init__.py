"""Business logic services."""

from app.services.adaptation_settings_service import AdaptationSettingsService
from app.services.benchmark_service import BenchmarkService
from app.services.progression_service import ProgressionService
from app.services.ride_service import RideService
from app.services.trend_service import TrendService

__all__ = [
    "AdaptationSettingsService",
    "BenchmarkService",
    "ProgressionService",
    "RideService",
    "TrendService",
]
