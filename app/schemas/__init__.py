"""Pydantic schemas for engine inputs and read models."""

from app.schemas.adaptation_settings import AdaptationSettingsRead
from app.schemas.benchmark import BenchmarkCreate, BenchmarkResponse
from app.schemas.progression import (
    LevelAdjustment,
    ProgressionHistoryResponse,
    ProgressionLevelResponse,
    WorkoutOutcome,
)
from app.schemas.ride import RideSummaryCreate, RideSummaryResponse, TrainingFormResponse, TssEstimate
from app.schemas.trends import ActiveTrendResponse, TrendCandidate, TrendDetectionSummary
from app.schemas.zones import ZoneBand

__all__ = [
    "AdaptationSettingsRead",
    "BenchmarkCreate",
    "BenchmarkResponse",
    "LevelAdjustment",
    "ProgressionHistoryResponse",
    "ProgressionLevelResponse",
    "WorkoutOutcome",
    "RideSummaryCreate",
    "RideSummaryResponse",
    "TrainingFormResponse",
    "TssEstimate",
    "ActiveTrendResponse",
    "TrendCandidate",
    "TrendDetectionSummary",
    "ZoneBand",
]
