"""
Trend Detector: directional, confidence-scored inferences over history.

Three detectors, each reading a bounded window that ends at ``as_of``:

1. **FTP**: estimated threshold power from recent rides vs. the current
   benchmark.  The estimate is the larger of the average normalized power
   of threshold rides and 95% of the average best-20-minute power.
2. **Volume**: average weekly TSS of the recent half of the window vs.
   the earlier (baseline) half.
3. **Zone fitness**: summed progression-level changes of each zone.

A detector either produces a :class:`TrendCandidate`, decides the change
is not significant (``None``), or raises :class:`InsufficientDataError`.
The entry points swallow the latter at DEBUG level: a missing trend never
fails a detection run.

Emission is "deactivate the prior active trend of the key, insert the new
one" in a single unit of work.  FTP improvement / decline (and volume
increase / decrease) form one family, so a new FTP trend replaces an
active one of the opposite direction too.  When no trend is produced the
prior active trend is left untouched.
"""

from __future__ import annotations

import datetime
import logging
from collections import defaultdict
from typing import Optional, Sequence

from pydantic import BaseModel, Field
from sqlmodel import Session

from app.core.clock import day_bounds, utc_date, utcnow
from app.core.exceptions import InsufficientDataError
from app.db.repositories.benchmark import BenchmarkRepository
from app.db.repositories.performance_trend import PerformanceTrendRepository
from app.db.repositories.progression import ProgressionRepository
from app.db.repositories.ride import RideRepository
from app.db.unit_of_work import UnitOfWork
from app.intelligence.zones import ZONE_NAMES, zone_for_intensity
from app.models.performance_trend import PerformanceTrend
from app.models.ride import RideSummary
from app.schemas.trends import TrendCandidate, TrendDetectionSummary

logger = logging.getLogger(__name__)

FTP_TREND_TYPES = ("ftp_improvement", "ftp_decline")
VOLUME_TREND_TYPES = ("volume_increase", "volume_decrease")
ZONE_TREND_TYPES = ("zone_fitness",)

# ======================================================================
# Configuration
# ======================================================================


class FTPTrendConfig(BaseModel):
    """Parameters of the FTP trend detector."""

    lookback_days: int = Field(28, ge=1)
    min_rides: int = Field(3, ge=1, description="Minimum threshold rides in the window")
    min_change_pct: float = Field(2.0, ge=0.0, description="Changes below this are not significant")
    peak_20min_factor: float = Field(0.95, gt=0.0, le=1.0)

    base_confidence: float = Field(0.60, ge=0.0, le=1.0)
    # /100, not /10: a 6% change must give 0.66 confidence, /10 would already cap it at 0.95
    confidence_pct_divisor: float = Field(100.0, gt=0.0)
    max_confidence: float = Field(0.95, ge=0.0, le=1.0)


class VolumeTrendConfig(BaseModel):
    """Parameters of the training-volume trend detector."""

    lookback_weeks: int = Field(4, ge=2)
    min_weeks_per_half: int = Field(2, ge=1)
    min_change_pct: float = Field(15.0, ge=0.0)

    base_confidence: float = Field(0.65, ge=0.0, le=1.0)
    confidence_pct_divisor: float = Field(50.0, gt=0.0)
    max_confidence: float = Field(0.90, ge=0.0, le=1.0)


class ZoneFitnessTrendConfig(BaseModel):
    """Parameters of the per-zone fitness trend detector."""

    lookback_days: int = Field(28, ge=1)
    min_entries: int = Field(3, ge=1, description="Minimum level changes in the window")
    min_abs_change: float = Field(0.5, ge=0.0, description="Summed change at or below this is stable")

    base_confidence: float = Field(0.65, ge=0.0, le=1.0)
    confidence_change_divisor: float = Field(5.0, gt=0.0)
    max_confidence: float = Field(0.90, ge=0.0, le=1.0)

    # Off by default: every change in the window counts the same
    recency_half_life_days: Optional[float] = Field(None, gt=0.0, description="Exponential recency weighting")


DEFAULT_FTP_CONFIG = FTPTrendConfig()
DEFAULT_VOLUME_CONFIG = VolumeTrendConfig()
DEFAULT_ZONE_CONFIG = ZoneFitnessTrendConfig()


def _confidence(magnitude: float, base: float, divisor: float, cap: float) -> float:
    return round(min(cap, base + magnitude / divisor), 2)


# ======================================================================
# FTP trend
# ======================================================================


def _estimate_threshold_power(threshold_powers: Sequence[float], peak_20min_powers: Sequence[float],
                              peak_factor: float = 0.95, ) -> float:
    """Larger of the average threshold-ride power and the scaled 20-min peak."""
    from_rides = sum(threshold_powers) / len(threshold_powers) if threshold_powers else 0.0
    from_peaks = peak_factor * sum(peak_20min_powers) / len(peak_20min_powers) if peak_20min_powers else 0.0
    return max(from_rides, from_peaks)


def _is_threshold_ride(ride: RideSummary, ftp_watts: int) -> bool:
    if not ride.normalized_power:
        return False
    zone = ride.zone or zone_for_intensity(ride.normalized_power / ftp_watts)
    return zone == "threshold"


def _compute_ftp_trend(current_ftp: int, rides: Sequence[RideSummary], start_date: datetime.date,
                       end_date: datetime.date, cfg: FTPTrendConfig = DEFAULT_FTP_CONFIG,
                       athlete_id: Optional[int] = None, ) -> Optional[TrendCandidate]:
    """FTP trend over the rides of one window.

    Raises:
        InsufficientDataError: fewer than ``cfg.min_rides`` threshold rides,
            or no usable power estimate.
    """
    threshold_powers = [r.normalized_power for r in rides if _is_threshold_ride(r, current_ftp)]
    peaks = [r.peak_20min_power for r in rides if r.peak_20min_power]

    if len(threshold_powers) < cfg.min_rides:
        raise InsufficientDataError("not enough threshold rides for an FTP trend", athlete_id,
                                    samples=len(threshold_powers), required=cfg.min_rides, )

    estimate = _estimate_threshold_power(threshold_powers, peaks, cfg.peak_20min_factor)
    if estimate <= 0:
        raise InsufficientDataError("no usable threshold power estimate", athlete_id,
                                    samples=len(threshold_powers), required=cfg.min_rides, )

    change = estimate - current_ftp
    pct = change / current_ftp * 100.0
    if abs(pct) < cfg.min_change_pct:
        return None

    improving = pct > 0
    return TrendCandidate(trend_type="ftp_improvement" if improving else "ftp_decline",
                          direction="improving" if improving else "declining",
                          confidence=_confidence(abs(pct), cfg.base_confidence, cfg.confidence_pct_divisor,
                                                 cfg.max_confidence),
                          start_date=start_date, end_date=end_date, value_change=round(change, 1),
                          value_change_percent=round(pct, 2), sample_count=len(threshold_powers),
                          metrics={"current_ftp": current_ftp, "estimated_ftp": round(estimate, 1),
                                   "threshold_rides": len(threshold_powers),
                                   "lookback_days": (end_date - start_date).days, }, )


# ======================================================================
# Volume trend
# ======================================================================


def _weekly_tss(rides: Sequence[RideSummary], as_of: datetime.date, weeks: int) -> dict[int, float]:
    """Sum TSS into 7-day blocks counted back from *as_of* (block 0 is newest)."""
    buckets: dict[int, float] = defaultdict(float)
    for ride in rides:
        days_ago = (as_of - utc_date(ride.recorded_at)).days
        if 0 <= days_ago < weeks * 7:
            buckets[days_ago // 7] += ride.tss or 0
    return dict(buckets)


def _compute_volume_trend(weekly: dict[int, float], as_of: datetime.date, weeks: int,
                          cfg: VolumeTrendConfig = DEFAULT_VOLUME_CONFIG,
                          athlete_id: Optional[int] = None, ) -> Optional[TrendCandidate]:
    """Volume trend from per-block TSS sums.

    Raises:
        InsufficientDataError: a half has fewer than
            ``cfg.min_weeks_per_half`` weeks with data, or the baseline is 0.
    """
    split = weeks // 2
    recent = [tss for block, tss in weekly.items() if block < split]
    baseline = [tss for block, tss in weekly.items() if split <= block < weeks]

    if len(recent) < cfg.min_weeks_per_half or len(baseline) < cfg.min_weeks_per_half:
        raise InsufficientDataError("not enough weeks with rides for a volume trend", athlete_id,
                                    samples=min(len(recent), len(baseline)), required=cfg.min_weeks_per_half, )

    recent_avg = sum(recent) / len(recent)
    baseline_avg = sum(baseline) / len(baseline)
    if baseline_avg == 0:
        raise InsufficientDataError("baseline volume is zero", athlete_id, samples=len(baseline),
                                    required=cfg.min_weeks_per_half, )

    change = recent_avg - baseline_avg
    pct = change / baseline_avg * 100.0
    if abs(pct) < cfg.min_change_pct:
        return None

    increasing = pct > 0
    return TrendCandidate(trend_type="volume_increase" if increasing else "volume_decrease",
                          direction="improving" if increasing else "declining",
                          confidence=_confidence(abs(pct), cfg.base_confidence, cfg.confidence_pct_divisor,
                                                 cfg.max_confidence),
                          start_date=as_of - datetime.timedelta(days=weeks * 7 - 1), end_date=as_of,
                          value_change=round(change, 1), value_change_percent=round(pct, 2),
                          sample_count=len(recent) + len(baseline),
                          metrics={"recent_avg_tss": round(recent_avg, 1), "baseline_avg_tss": round(baseline_avg, 1),
                                   "recent_weeks": len(recent), "baseline_weeks": len(baseline), }, )


# ======================================================================
# Zone fitness trend
# ======================================================================


def _weighted_change(changes: Sequence[tuple[datetime.datetime, float]], as_of: datetime.date,
                     half_life_days: Optional[float], ) -> float:
    if half_life_days is None:
        return sum(delta for _, delta in changes)
    total = 0.0
    for created_at, delta in changes:
        age = max((as_of - utc_date(created_at)).days, 0)
        total += delta * 0.5 ** (age / half_life_days)
    return total


def _compute_zone_fitness(zone: str, changes: Sequence[tuple[datetime.datetime, float]], as_of: datetime.date,
                          current_level: float, workouts_completed: int,
                          cfg: ZoneFitnessTrendConfig = DEFAULT_ZONE_CONFIG,
                          athlete_id: Optional[int] = None, ) -> Optional[TrendCandidate]:
    """Fitness trend of one zone from its level changes in the window.

    Stable zones (summed change within ``±cfg.min_abs_change``) produce no
    trend.

    Raises:
        InsufficientDataError: fewer than ``cfg.min_entries`` changes.
    """
    if len(changes) < cfg.min_entries:
        raise InsufficientDataError(f"not enough level changes in {zone}", athlete_id, samples=len(changes),
                                    required=cfg.min_entries, )

    total = round(_weighted_change(changes, as_of, cfg.recency_half_life_days), 2)
    if abs(total) <= cfg.min_abs_change:
        return None

    return TrendCandidate(trend_type="zone_fitness", zone=zone, direction="improving" if total > 0 else "declining",
                          confidence=_confidence(abs(total), cfg.base_confidence, cfg.confidence_change_divisor,
                                                 cfg.max_confidence),
                          start_date=as_of - datetime.timedelta(days=cfg.lookback_days), end_date=as_of,
                          value_change=total, value_change_percent=None, sample_count=len(changes),
                          metrics={"current_level": current_level, "workouts_completed": workouts_completed,
                                   "lookback_days": cfg.lookback_days, }, )


# ======================================================================
# Emission
# ======================================================================


def _emit(session: Session, athlete_id: int, candidate: TrendCandidate, family: Sequence[str]) -> PerformanceTrend:
    """Replace the active trend of the candidate's key in one unit of work."""
    repo = PerformanceTrendRepository(session)
    with UnitOfWork(session):
        replaced = repo.deactivate_active(athlete_id, family, candidate.zone)
        trend = repo.insert_active(PerformanceTrend(athlete_id=athlete_id, **candidate.model_dump()))

    logger.info("Athlete %s: %s trend%s %s (confidence %.2f, replaced %d)", athlete_id, candidate.trend_type,
                f" [{candidate.zone}]" if candidate.zone else "", candidate.direction, candidate.confidence, replaced, )
    return trend


# ======================================================================
# Entry points
# ======================================================================


def detect_ftp_trend(session: Session, athlete_id: int, as_of: datetime.date,
                     config: Optional[FTPTrendConfig] = None, ) -> Optional[PerformanceTrend]:
    """Detect and store an FTP trend.

    Returns:
        The new active :class:`PerformanceTrend`, or ``None`` when the
        athlete has no current benchmark, not enough data, or no
        significant change.
    """
    cfg = config or DEFAULT_FTP_CONFIG

    benchmark = BenchmarkRepository(session).get_current(athlete_id)
    if benchmark is None:
        logger.debug("Athlete %s: no current benchmark, FTP trend skipped", athlete_id)
        return None

    start = as_of - datetime.timedelta(days=cfg.lookback_days)
    rides = RideRepository(session).get_by_athlete_range(athlete_id, *day_bounds(start, as_of))

    try:
        candidate = _compute_ftp_trend(benchmark.ftp_watts, rides, start, as_of, cfg, athlete_id)
    except InsufficientDataError as e:
        logger.debug("FTP trend skipped: %s (%d/%d)", e, e.samples, e.required)
        return None

    if candidate is None:
        logger.debug("Athlete %s: FTP change below %.1f%%", athlete_id, cfg.min_change_pct)
        return None
    return _emit(session, athlete_id, candidate, FTP_TREND_TYPES)


def detect_volume_trend(session: Session, athlete_id: int, as_of: datetime.date,
                        config: Optional[VolumeTrendConfig] = None, ) -> Optional[PerformanceTrend]:
    """Detect and store a training-volume trend."""
    cfg = config or DEFAULT_VOLUME_CONFIG
    weeks = cfg.lookback_weeks

    start = as_of - datetime.timedelta(days=weeks * 7 - 1)
    rides = RideRepository(session).get_by_athlete_range(athlete_id, *day_bounds(start, as_of))

    try:
        candidate = _compute_volume_trend(_weekly_tss(rides, as_of, weeks), as_of, weeks, cfg, athlete_id)
    except InsufficientDataError as e:
        logger.debug("Volume trend skipped: %s (%d/%d)", e, e.samples, e.required)
        return None

    if candidate is None:
        logger.debug("Athlete %s: volume change below %.1f%%", athlete_id, cfg.min_change_pct)
        return None
    return _emit(session, athlete_id, candidate, VOLUME_TREND_TYPES)


def _zone_order(zone: str) -> int:
    return ZONE_NAMES.index(zone) if zone in ZONE_NAMES else len(ZONE_NAMES)


def detect_zone_fitness_trends(session: Session, athlete_id: int, as_of: datetime.date,
                               config: Optional[ZoneFitnessTrendConfig] = None, ) -> list[PerformanceTrend]:
    """Detect and store a fitness trend for every zone with a progression level."""
    cfg = config or DEFAULT_ZONE_CONFIG
    repo = ProgressionRepository(session)
    since, until = day_bounds(as_of - datetime.timedelta(days=cfg.lookback_days), as_of)

    trends: list[PerformanceTrend] = []
    for level in sorted(repo.get_all(athlete_id), key=lambda lv: _zone_order(lv.zone)):
        history = repo.get_history(athlete_id, zone=level.zone, since=since, until=until)
        changes = [(entry.created_at, entry.level_change) for entry in history]

        try:
            candidate = _compute_zone_fitness(level.zone, changes, as_of, level.level, level.workouts_completed,
                                              cfg, athlete_id, )
        except InsufficientDataError as e:
            logger.debug("Zone trend skipped: %s (%d/%d)", e, e.samples, e.required)
            continue

        if candidate is None:
            logger.debug("Athlete %s: %s fitness stable", athlete_id, level.zone)
            continue
        trends.append(_emit(session, athlete_id, candidate, ZONE_TREND_TYPES))

    return trends


def detect_all_trends(session: Session, athlete_id: int, as_of: Optional[datetime.date] = None,
                      lookback_days: int = 28, ) -> TrendDetectionSummary:
    """Run every detector for one athlete.

    Args:
        session: Database session.
        athlete_id: Athlete ID.
        as_of: End of the analysed window (defaults to today).
        lookback_days: Window of the FTP and zone detectors; the volume
            detector uses ``lookback_days // 7`` weeks.

    Returns:
        :class:`TrendDetectionSummary` with the ids of the trends emitted.
    """
    as_of = as_of or utcnow().date()

    ftp_trend = detect_ftp_trend(session, athlete_id, as_of, FTPTrendConfig(lookback_days=lookback_days))
    zone_trends = detect_zone_fitness_trends(session, athlete_id, as_of,
                                             ZoneFitnessTrendConfig(lookback_days=lookback_days), )
    volume_trend = detect_volume_trend(session, athlete_id, as_of,
                                       VolumeTrendConfig(lookback_weeks=max(lookback_days // 7, 2)), )

    summary = TrendDetectionSummary(trend_count=(ftp_trend is not None) + len(zone_trends) + (volume_trend is not None),
                                    ftp_trend_id=ftp_trend.id if ftp_trend else None,
                                    zone_trend_ids=[t.id for t in zone_trends],
                                    volume_trend_id=volume_trend.id if volume_trend else None, )
    logger.info("Athlete %s: trend detection as of %s produced %d trend(s)", athlete_id, as_of, summary.trend_count)
    return summary
