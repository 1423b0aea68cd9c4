"""Tests for trend detection and emission against an in-memory database."""

import datetime

import pytest
from sqlmodel import select

from app.core.exceptions import StateConsistencyError
from app.db.repositories.performance_trend import PerformanceTrendRepository
from app.db.unit_of_work import UnitOfWork
from app.intelligence.trends import detect_ftp_trend, detect_volume_trend, detect_zone_fitness_trends
from app.models.performance_trend import PerformanceTrend
from app.models.ride import RideSummary
from app.schemas.benchmark import BenchmarkCreate
from app.schemas.progression import WorkoutOutcome
from app.services.benchmark_service import BenchmarkService
from app.services.progression_service import ProgressionService
from app.services.trend_service import TrendService, describe_trend

ATHLETE = 1


# ======================================================================
# Helpers
# ======================================================================


def _at(as_of: datetime.date, days_ago: int, hour: int = 8) -> datetime.datetime:
    return datetime.datetime.combine(as_of - datetime.timedelta(days=days_ago), datetime.time(hour, 0), tzinfo=datetime.timezone.utc)


def _set_ftp(session, ftp: int) -> None:
    BenchmarkService(session).set_current_benchmark(ATHLETE, BenchmarkCreate(ftp_watts=ftp,
                                                                             test_date=datetime.date(2026, 1, 1)))


def _add_rides(session, rides: list[RideSummary]) -> None:
    session.add_all(rides)
    session.commit()


def _threshold_rides(as_of, np: float = 265) -> list[RideSummary]:
    return [RideSummary(athlete_id=ATHLETE, recorded_at=_at(as_of, d), duration_seconds=3600, normalized_power=np,
                        zone="threshold") for d in (2, 9, 16)]


def _volume_rides(as_of, recent: int = 600, baseline: int = 400) -> list[RideSummary]:
    return [RideSummary(athlete_id=ATHLETE, recorded_at=_at(as_of, d, hour=18), duration_seconds=7200, tss=tss)
            for d, tss in ((1, recent), (8, recent), (15, baseline), (22, baseline))]


def _tempo_progress(session, as_of) -> None:
    service = ProgressionService(session)
    for days_ago in (20, 12, 4):
        service.apply_workout_outcome(ATHLETE, WorkoutOutcome(zone="tempo", workout_level=3.0, completion_pct=100,
                                                              perceived_exertion=6,
                                                              completed_at=_at(as_of, days_ago), ))


def _active(session) -> list[PerformanceTrend]:
    return list(session.exec(select(PerformanceTrend).where(PerformanceTrend.is_active == True)).all())  # noqa: E712


# ======================================================================
# Orchestrator
# ======================================================================


class TestDetectAllTrends:
    def test_all_three_detectors(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of) + _volume_rides(as_of))
        _tempo_progress(session, as_of)

        summary = TrendService(session).detect_all_trends(ATHLETE, lookback_days=28, as_of=as_of)

        assert summary.trend_count == 3
        assert summary.ftp_trend_id is not None
        assert summary.volume_trend_id is not None
        assert len(summary.zone_trend_ids) == 1

        ftp = session.get(PerformanceTrend, summary.ftp_trend_id)
        assert ftp.trend_type == "ftp_improvement"
        assert ftp.confidence == 0.66
        assert ftp.metrics["current_ftp"] == 250

        zone = session.get(PerformanceTrend, summary.zone_trend_ids[0])
        assert zone.zone == "tempo"
        assert zone.value_change == 0.9

    def test_empty_history(self, session, as_of):
        summary = TrendService(session).detect_all_trends(ATHLETE, as_of=as_of)
        assert summary.trend_count == 0
        assert summary.ftp_trend_id is None
        assert summary.zone_trend_ids == []
        assert summary.volume_trend_id is None

    def test_rerun_keeps_one_active_per_key(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of) + _volume_rides(as_of))
        _tempo_progress(session, as_of)
        service = TrendService(session)

        first = service.detect_all_trends(ATHLETE, as_of=as_of)
        second = service.detect_all_trends(ATHLETE, as_of=as_of)

        assert second.trend_count == 3
        assert second.ftp_trend_id != first.ftp_trend_id
        active = _active(session)
        assert len(active) == 3
        keys = {(t.trend_type, t.zone) for t in active}
        assert len(keys) == 3
        # Superseded rows are kept, inactive
        assert len(session.exec(select(PerformanceTrend)).all()) == 6
        assert session.get(PerformanceTrend, first.ftp_trend_id).is_active is False

    def test_short_lookback_runs_every_detector(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of) + _volume_rides(as_of))

        summary = TrendService(session).detect_all_trends(ATHLETE, lookback_days=5, as_of=as_of)

        # One threshold ride inside five days, one week of data per volume half
        assert summary.trend_count == 0
        assert summary.ftp_trend_id is None
        assert summary.volume_trend_id is None

    def test_long_lookback_runs_every_detector(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of) + _volume_rides(as_of))
        _tempo_progress(session, as_of)

        summary = TrendService(session).detect_all_trends(ATHLETE, lookback_days=200, as_of=as_of)

        assert summary.ftp_trend_id is not None
        assert len(summary.zone_trend_ids) == 1
        # 28 weeks: every ride lands in the recent half, so no baseline
        assert summary.volume_trend_id is None
        assert session.get(PerformanceTrend, summary.ftp_trend_id).metrics["lookback_days"] == 200

    def test_trends_are_per_athlete(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of))
        TrendService(session).detect_all_trends(ATHLETE, as_of=as_of)
        assert TrendService(session).detect_all_trends(2, as_of=as_of).trend_count == 0
        assert TrendService(session).get_active_trends(2) == []


# ======================================================================
# Lifecycle of a trend key
# ======================================================================


class TestTrendLifecycle:
    def test_opposite_direction_replaces_active_trend(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of))
        assert detect_ftp_trend(session, ATHLETE, as_of).trend_type == "ftp_improvement"

        _set_ftp(session, 290)
        assert detect_ftp_trend(session, ATHLETE, as_of).trend_type == "ftp_decline"

        active = _active(session)
        assert [t.trend_type for t in active] == ["ftp_decline"]

    def test_no_trend_leaves_prior_active(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of))
        first = detect_ftp_trend(session, ATHLETE, as_of)

        _set_ftp(session, 264)
        assert detect_ftp_trend(session, ATHLETE, as_of) is None
        assert [t.id for t in _active(session)] == [first.id]

    def test_ftp_needs_benchmark(self, session, as_of):
        _add_rides(session, _threshold_rides(as_of))
        assert detect_ftp_trend(session, ATHLETE, as_of) is None

    def test_rides_outside_window_ignored(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of - datetime.timedelta(days=40)))
        assert detect_ftp_trend(session, ATHLETE, as_of) is None

    def test_volume_decrease(self, session, as_of):
        _add_rides(session, _volume_rides(as_of, recent=200, baseline=400))
        trend = detect_volume_trend(session, ATHLETE, as_of)
        assert trend.trend_type == "volume_decrease"
        assert trend.metrics["baseline_avg_tss"] == 400.0

    def test_stable_zone_produces_no_trend(self, session, as_of):
        service = ProgressionService(session)
        for days_ago in (10, 6, 2):
            service.apply_workout_outcome(ATHLETE, WorkoutOutcome(zone="endurance", workout_level=3.0,
                                                                  completion_pct=75, perceived_exertion=8,
                                                                  completed_at=_at(as_of, days_ago), ))
        assert detect_zone_fitness_trends(session, ATHLETE, as_of) == []

    def test_old_level_changes_ignored(self, session, as_of):
        _tempo_progress(session, as_of - datetime.timedelta(days=60))
        assert detect_zone_fitness_trends(session, ATHLETE, as_of) == []


# ======================================================================
# Presentation
# ======================================================================


class TestActiveTrends:
    def test_descriptions_and_order(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of) + _volume_rides(as_of))
        _tempo_progress(session, as_of)
        service = TrendService(session)
        service.detect_all_trends(ATHLETE, as_of=as_of)

        trends = service.get_active_trends(ATHLETE)
        assert [t.description for t in trends] == [
            "Training volume up +200 TSS/week (+50.0%)",
            "Tempo fitness improving (+0.9 levels)",
            "FTP trending up +15W (+6.0%)",
        ]
        assert [t.confidence for t in trends] == [0.9, 0.83, 0.66]
        assert all(t.days_active == 0 for t in trends)

    def test_days_active(self, session, as_of):
        _set_ftp(session, 250)
        _add_rides(session, _threshold_rides(as_of))
        trend = detect_ftp_trend(session, ATHLETE, as_of)
        later = trend.created_at.date() + datetime.timedelta(days=5)

        assert TrendService(session).get_active_trends(ATHLETE, as_of=later)[0].days_active == 5

    @pytest.mark.parametrize("trend_type, zone, direction, change, pct, expected", [
        ("ftp_decline", None, "declining", -12.4, -4.96, "FTP trending down -12W (-5.0%)"),
        ("volume_decrease", None, "declining", -150.0, -30.0, "Training volume down -150 TSS/week (-30.0%)"),
        ("zone_fitness", "sweet_spot", "declining", -0.7, None, "Sweet spot fitness declining (-0.7 levels)"),
    ])
    def test_describe_trend(self, trend_type, zone, direction, change, pct, expected):
        trend = PerformanceTrend(athlete_id=1, trend_type=trend_type, zone=zone, direction=direction, confidence=0.7,
                                 start_date=datetime.date(2026, 1, 1), end_date=datetime.date(2026, 1, 29),
                                 value_change=change, value_change_percent=pct)
        assert describe_trend(trend) == expected


# ======================================================================
# Repository invariant
# ======================================================================


class TestPerformanceTrendRepository:
    def _trend(self, trend_type: str = "zone_fitness", zone: str | None = "tempo") -> PerformanceTrend:
        return PerformanceTrend(athlete_id=ATHLETE, trend_type=trend_type, zone=zone, direction="improving",
                                confidence=0.8, start_date=datetime.date(2026, 1, 1),
                                end_date=datetime.date(2026, 1, 29), value_change=0.8)

    def test_second_active_trend_rejected(self, session):
        repo = PerformanceTrendRepository(session)
        with UnitOfWork(session):
            repo.insert_active(self._trend())

        with pytest.raises(StateConsistencyError):
            with UnitOfWork(session):
                repo.insert_active(self._trend())
        assert len(repo.get_by_athlete(ATHLETE)) == 1

    def test_zones_are_separate_keys(self, session):
        repo = PerformanceTrendRepository(session)
        with UnitOfWork(session):
            repo.insert_active(self._trend(zone="tempo"))
            repo.insert_active(self._trend(zone="threshold"))
            repo.insert_active(self._trend(trend_type="ftp_improvement", zone=None))
        assert len(repo.get_active(ATHLETE)) == 3

    def test_failed_insert_keeps_prior_active(self, session, monkeypatch):
        repo = PerformanceTrendRepository(session)
        with UnitOfWork(session):
            first = repo.insert_active(self._trend())

        def _fail(trend):
            raise RuntimeError("insert failed")

        monkeypatch.setattr(repo, "insert_active", _fail)
        with pytest.raises(RuntimeError):
            with UnitOfWork(session):
                repo.deactivate_active(ATHLETE, ["zone_fitness"], "tempo")
                repo.insert_active(self._trend())

        assert [t.id for t in repo.get_active(ATHLETE)] == [first.id]
