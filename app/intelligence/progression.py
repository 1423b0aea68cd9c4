"""
Progression Tracker: bounded per-zone level adjustment.

Every completed workout moves the athlete's level in the workout's zone by
a small, bounded step.  The step depends on how much of the workout was
completed and how hard it felt (RPE):

    completion >= 90   RPE <= 7 -> +0.3   RPE <= 9 -> +0.2   else +0.1
    completion >= 70   RPE <= 8 -> +0.1   else  0.0
    completion >= 50   RPE <  9 -> -0.1   else -0.3
    completion <  50   any      -> -0.5

Damping
-------

A workout far from the athlete's level says less about it:

- a failed workout more than 2 levels *above* the athlete only counts half,
- a successful workout more than 2 levels *below* only counts half.

The resulting level is clamped to ``[1.0, 10.0]``; a new zone starts at
:data:`BASELINE_LEVEL`.
"""

from __future__ import annotations

import operator
from typing import Callable, Optional

from pydantic import BaseModel, Field

from app.schemas.progression import LevelAdjustment

BASELINE_LEVEL = 3.0
MIN_LEVEL = 1.0
MAX_LEVEL = 10.0

# ======================================================================
# Configuration
# ======================================================================

# (min completion %, [(comparison, RPE bound, delta), ...], delta when no bracket matches)
_ADJUSTMENT_TABLE: list[tuple[float, list[tuple[Callable[[float, float], bool], float, float]], float]] = [
    (90.0, [(operator.le, 7.0, 0.3), (operator.le, 9.0, 0.2)], 0.1),
    (70.0, [(operator.le, 8.0, 0.1)], 0.0),
    (50.0, [(operator.lt, 9.0, -0.1)], -0.3),
    (0.0, [], -0.5),
]

# (max average RPE, seeded level) used to bootstrap levels from past workouts
_RPE_SEED_TABLE: list[tuple[float, float]] = [
    (5.0, 7.0),
    (6.0, 6.0),
    (7.0, 5.0),
    (8.0, 4.0),
    (9.0, 3.0),
    (float("inf"), 2.0),
]


class ProgressionConfig(BaseModel):
    """Damping parameters of the adjustment policy."""

    damping_gap: float = Field(2.0, gt=0.0, description="Level difference beyond which a step is damped")
    damping_factor: float = Field(0.5, gt=0.0, le=1.0)


DEFAULT_CONFIG = ProgressionConfig()


# ======================================================================
# Adjustment
# ======================================================================


def _base_delta(completion_pct: float, rpe: float) -> float:
    """Undamped level step for a completion / RPE pair."""
    for min_completion, brackets, otherwise in _ADJUSTMENT_TABLE:
        if completion_pct >= min_completion:
            for compare, bound, delta in brackets:
                if compare(rpe, bound):
                    return delta
            return otherwise
    return _ADJUSTMENT_TABLE[-1][2]


def _damp(delta: float, level_diff: float, cfg: ProgressionConfig) -> tuple[float, bool]:
    if level_diff > cfg.damping_gap and delta < 0:
        return delta * cfg.damping_factor, True
    if level_diff < -cfg.damping_gap and delta > 0:
        return delta * cfg.damping_factor, True
    return delta, False


def clamp_level(level: float) -> float:
    """Clamp to ``[1.0, 10.0]`` and round to 2 decimals."""
    return round(min(MAX_LEVEL, max(MIN_LEVEL, level)), 2)


def reason_for(delta: float, completion_pct: float) -> str:
    if delta > 0:
        return "workout_success"
    if delta < 0:
        return "workout_failure" if completion_pct < 50 else "workout_struggle"
    return "no_change"


def compute_adjustment(completion_pct: float, rpe: float, workout_level: float, current_level: float,
                       config: Optional[ProgressionConfig] = None, ) -> LevelAdjustment:
    """Apply the bounded-adjustment policy to one workout outcome.

    Args:
        completion_pct: Share of the workout completed, 0-100.
        rpe: Perceived exertion, 1-10.
        workout_level: Difficulty level of the workout, 1-10.
        current_level: The athlete's level in the workout's zone.
        config: Optional :class:`ProgressionConfig` override.

    Returns:
        :class:`LevelAdjustment` with the applied delta, the damping
        decision, the reason and the clamped new level.
    """
    cfg = config or DEFAULT_CONFIG

    base = _base_delta(completion_pct, rpe)
    level_diff = workout_level - current_level
    delta, damped = _damp(base, level_diff, cfg)
    delta = round(delta, 2)

    new_level = clamp_level(current_level + delta)
    return LevelAdjustment(base_delta=base, delta=delta, level_diff=round(level_diff, 2), damped=damped,
                           reason=reason_for(delta, completion_pct), old_level=current_level,
                           new_level=new_level, )


# ======================================================================
# Seeding
# ======================================================================


def seed_level_from_rpe(average_rpe: float) -> float:
    """Initial level for a zone given the average RPE of its past workouts.

    Lower perceived effort means the athlete handles the zone well, so it
    starts higher.
    """
    for max_rpe, level in _RPE_SEED_TABLE:
        if average_rpe <= max_rpe:
            return level
    return _RPE_SEED_TABLE[-1][1]
