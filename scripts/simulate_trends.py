"""Simulate eight weeks of training for one athlete and run trend detection.

Everything runs against an in-memory SQLite database, so no server is
needed:

    python scripts/simulate_trends.py
"""

import datetime
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.db.session import get_session
from app.schemas.benchmark import BenchmarkCreate
from app.schemas.progression import WorkoutOutcome
from app.schemas.ride import RideSummaryCreate
from app.services import BenchmarkService, ProgressionService, RideService, TrendService

ATHLETE_ID = 1
AS_OF = datetime.date(2026, 3, 1)

# (days before AS_OF, minutes, normalized power, 20-min peak, category, zone, completion %, RPE)
PLAN = [
    (55, 60, 150, None, "endurance", "endurance", 100, 5),
    (52, 90, 155, None, "endurance", "endurance", 100, 6),
    (48, 60, 160, None, "endurance", "endurance", 100, 6),
    (44, 75, 200, 210, "sweet_spot", "sweet_spot", 95, 7),
    (41, 60, 158, None, "endurance", "endurance", 100, 5),
    (37, 60, 200, 212, "sweet_spot", "sweet_spot", 100, 7),
    (34, 90, 160, None, "endurance", "endurance", 100, 5),
    (30, 60, 205, 215, "sweet_spot", "sweet_spot", 100, 8),
    # Build block: more threshold work, higher volume
    (26, 75, 238, 245, "threshold", "threshold", 100, 7),
    (24, 120, 165, None, "endurance", "endurance", 100, 5),
    (22, 75, 240, 248, "threshold", "threshold", 100, 7),
    (19, 150, 168, None, "endurance", "endurance", 100, 6),
    (17, 75, 242, 250, "threshold", "threshold", 100, 8),
    (12, 80, 244, 252, "threshold", "threshold", 100, 7),
    (10, 150, 170, None, "endurance", "endurance", 100, 5),
    (8, 80, 245, 255, "threshold", "threshold", 100, 7),
    (5, 180, 172, None, "endurance", "endurance", 100, 6),
    (3, 80, 246, 256, "threshold", "threshold", 100, 7),
    (1, 120, 175, None, "endurance", "endurance", 100, 5),
]


def main():
    setup_logging()
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)

    with get_session(engine) as session:
        zones = BenchmarkService(session).set_current_benchmark(
            ATHLETE_ID, BenchmarkCreate(ftp_watts=235, lthr_bpm=168, test_date=AS_OF - datetime.timedelta(days=60),
                                        test_method="ramp"), )

        print()
        print("=" * 60)
        print(f"{'Zone':<12} {'Power (W)':>12} {'HR (bpm)':>12}")
        print("=" * 60)
        for z in zones:
            print(f"{z.zone_name:<12} {z.power_min:>5}-{z.power_max:<6} {z.hr_min:>5}-{z.hr_max:<6}")

        rides = RideService(session)
        progression = ProgressionService(session)
        for days_before, minutes, np_watts, peak, category, zone, completion, rpe in PLAN:
            when = datetime.datetime.combine(AS_OF - datetime.timedelta(days=days_before), datetime.time(7, 30))
            rides.record_ride(ATHLETE_ID, RideSummaryCreate(recorded_at=when, duration_seconds=minutes * 60,
                                                            normalized_power=np_watts, peak_20min_power=peak,
                                                            workout_category=category, ))
            progression.apply_workout_outcome(ATHLETE_ID, WorkoutOutcome(zone=zone, workout_level=4.0,
                                                                         completion_pct=completion,
                                                                         perceived_exertion=rpe, completed_at=when, ))

        trends = TrendService(session)
        summary = trends.detect_all_trends(ATHLETE_ID, lookback_days=28, as_of=AS_OF)
        form = rides.training_form(ATHLETE_ID, as_of=AS_OF)

        print()
        print("=" * 60)
        print(f"Trends detected: {summary.trend_count}")
        print("=" * 60)
        for trend in trends.get_active_trends(ATHLETE_ID, as_of=AS_OF):
            print(f"  [{trend.confidence:.2f}] {trend.description}")

        print()
        print(f"CTL {form.ctl}  ATL {form.atl}  TSB {form.tsb}  ->  {form.status}")


if __name__ == "__main__":
    main()
