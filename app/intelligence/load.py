"""
Load Estimator: Training Stress Score and performance-management chart.

TSS
---

Two estimators, chosen by data availability:

- **power**: ``hours * IF^2 * 100`` with ``IF = power / FTP``.  Normalized
  power is preferred over average power.
- **heuristic**: ``(50 TSS/hour + 10 TSS per 300 m climbed) * multiplier``,
  the multiplier coming from the workout category (recovery 0.5 ... vo2max
  2.0).  Used for rides without power or without a benchmark.

Form
----

CTL (fitness) and ATL (fatigue) are exponentially weighted sums of a daily
TSS series with 42- and 7-day time constants; TSB (form) is their
difference.  CTL uses the whole series, ATL only its last 7 days.
"""

from __future__ import annotations

import datetime
import math
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from app.intelligence.zones import round_half_up
from app.schemas.ride import TssEstimate

# ======================================================================
# Configuration
# ======================================================================

HEURISTIC_TSS_PER_HOUR = 50
HEURISTIC_TSS_PER_300M = 10

_CATEGORY_MULTIPLIERS: dict[str, float] = {
    "recovery": 0.5,
    "endurance": 1.0,
    "tempo": 1.3,
    "sweet_spot": 1.5,
    "threshold": 1.7,
    "vo2max": 2.0,
    "hill_repeats": 1.6,
}


class FormConfig(BaseModel):
    """Windows of the performance-management chart."""

    window_days: int = Field(60, ge=7, le=365, description="Length of the daily TSS series")
    ctl_days: int = Field(42, ge=7, le=90)
    atl_days: int = Field(7, ge=1, le=28)


DEFAULT_FORM_CONFIG = FormConfig()

# ======================================================================
# TSS
# ======================================================================


def category_multiplier(category: Optional[str]) -> float:
    """Intensity multiplier of a workout category, 1.0 when unknown."""
    if not category:
        return 1.0
    return _CATEGORY_MULTIPLIERS.get(category, 1.0)


def power_tss(duration_seconds: float, power_watts: Optional[float], ftp_watts: Optional[float]) -> Optional[int]:
    """Power-based TSS, or ``None`` without a usable FTP or power."""
    if not ftp_watts or not power_watts:
        return None
    hours = duration_seconds / 3600.0
    intensity = power_watts / ftp_watts
    return round_half_up(hours * intensity * intensity * 100)


def heuristic_tss(duration_minutes: float, elevation_gain_m: float = 0.0, category: Optional[str] = None) -> int:
    """Duration / climbing / category TSS for rides without power data."""
    base = round_half_up(duration_minutes / 60.0 * HEURISTIC_TSS_PER_HOUR)
    elevation = (elevation_gain_m or 0.0) / 300.0 * HEURISTIC_TSS_PER_300M
    return round_half_up((base + elevation) * category_multiplier(category))


def estimate_tss(duration_seconds: int, ftp_watts: Optional[int] = None, normalized_power: Optional[float] = None,
                 average_power: Optional[float] = None, elevation_gain_m: float = 0.0,
                 category: Optional[str] = None, ) -> TssEstimate:
    """Pick the best available estimator for one ride."""
    power = normalized_power or average_power
    tss = power_tss(duration_seconds, power, ftp_watts)
    if tss is not None:
        return TssEstimate(tss=tss, method="power", intensity_factor=round(power / ftp_watts, 3))

    return TssEstimate(tss=heuristic_tss(duration_seconds / 60.0, elevation_gain_m, category), method="heuristic")


# ======================================================================
# Performance-management chart
# ======================================================================


def _weighted_load(daily_tss: Sequence[float], time_constant: int) -> int:
    if not daily_tss:
        return 0
    decay = 1.0 / time_constant
    n = len(daily_tss)
    total = sum(tss * math.exp(-decay * (n - i - 1)) for i, tss in enumerate(daily_tss))
    return round_half_up(total * decay)


def compute_ctl(daily_tss: Sequence[float], time_constant: int = 42) -> int:
    """Chronic training load of a daily TSS series (oldest day first)."""
    return _weighted_load(daily_tss, time_constant)


def compute_atl(daily_tss: Sequence[float], time_constant: int = 7) -> int:
    """Acute training load over the last *time_constant* days of the series."""
    return _weighted_load(list(daily_tss)[-time_constant:], time_constant)


def compute_tsb(ctl: int, atl: int) -> int:
    return ctl - atl


def classify_form(tsb: float, fatigued_threshold: float = -30.0, fresh_threshold: float = 5.0) -> str:
    """Label a TSB value against an athlete's thresholds."""
    if tsb < fatigued_threshold - 10:
        return "very_fatigued"
    if tsb < fatigued_threshold:
        return "fatigued"
    if tsb > fresh_threshold:
        return "fresh"
    return "balanced"


def daily_tss_series(ride_loads: Sequence[tuple[datetime.date, int]], start: datetime.date,
                     end: datetime.date, ) -> list[int]:
    """Sum ride TSS per day over ``[start, end]``, zero-filling rest days."""
    days = (end - start).days + 1
    series = [0] * max(days, 0)
    for day, tss in ride_loads:
        offset = (day - start).days
        if 0 <= offset < len(series):
            series[offset] += tss or 0
    return series
