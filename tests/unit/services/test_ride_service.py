"""Tests for RideService and AdaptationSettingsService."""

import datetime

import pytest

from app.models.adaptation_settings import AdaptationSettings
from app.schemas.benchmark import BenchmarkCreate
from app.schemas.ride import RideSummaryCreate
from app.services.adaptation_settings_service import AdaptationSettingsService
from app.services.benchmark_service import BenchmarkService
from app.services.ride_service import RideService


def _ride(as_of: datetime.date, days_ago: int = 0, minutes: int = 60, **kwargs) -> RideSummaryCreate:
    recorded_at = datetime.datetime.combine(as_of - datetime.timedelta(days=days_ago), datetime.time(7, 0))
    return RideSummaryCreate(recorded_at=recorded_at, duration_seconds=minutes * 60, **kwargs)


@pytest.fixture
def with_benchmark(session):
    BenchmarkService(session).set_current_benchmark(1, BenchmarkCreate(ftp_watts=250, lthr_bpm=170,
                                                                       test_date=datetime.date(2026, 1, 1)))


class TestRecordRide:
    def test_power_tss_and_zone(self, session, as_of, with_benchmark):
        ride = RideService(session).record_ride(1, _ride(as_of, normalized_power=250, average_power=230))
        assert ride.tss == 100
        assert ride.tss_method == "power"
        assert ride.zone == "threshold"
        assert ride.id is not None

    def test_heuristic_without_benchmark(self, session, as_of):
        ride = RideService(session).record_ride(1, _ride(as_of, normalized_power=250, workout_category="endurance"))
        assert ride.tss == 50
        assert ride.tss_method == "heuristic"
        assert ride.zone is None

    def test_heuristic_without_power(self, session, as_of, with_benchmark):
        ride = RideService(session).record_ride(1, _ride(as_of, minutes=90, elevation_gain_m=300,
                                                         workout_category="tempo"))
        assert ride.tss == 111
        assert ride.tss_method == "heuristic"
        assert ride.zone is None

    def test_supplied_zone_kept(self, session, as_of, with_benchmark):
        ride = RideService(session).record_ride(1, _ride(as_of, normalized_power=150, zone="vo2max"))
        assert ride.zone == "vo2max"

    def test_unknown_zone_rejected(self, session, as_of):
        with pytest.raises(ValueError):
            RideService(session).record_ride(1, _ride(as_of, zone="sprint"))


class TestTrainingForm:
    def test_no_rides(self, session, as_of):
        form = RideService(session).training_form(1, as_of)
        assert (form.ctl, form.atl, form.tsb) == (0, 0, 0)
        assert form.status == "balanced"
        assert form.fatigued_threshold == -30.0

    def test_hard_week_is_very_fatigued(self, session, as_of):
        service = RideService(session)
        for days_ago in range(7):
            service.record_ride(1, _ride(as_of, days_ago=days_ago, minutes=240))

        form = service.training_form(1, as_of)
        assert form.atl > form.ctl
        assert form.tsb < -40
        assert form.status == "very_fatigued"

    def test_rides_after_as_of_ignored(self, session, as_of):
        service = RideService(session)
        service.record_ride(1, _ride(as_of, days_ago=-3, minutes=240))
        assert service.training_form(1, as_of).atl == 0

    def test_uses_athlete_thresholds(self, session, as_of):
        session.add(AdaptationSettings(athlete_id=1, tsb_fatigued_threshold=-20.0, tsb_fresh_threshold=-5.0))
        session.commit()

        form = RideService(session).training_form(1, as_of)
        assert form.status == "fresh"
        assert form.fresh_threshold == -5.0


class TestAdaptationSettingsService:
    def test_defaults_when_missing(self, session):
        settings = AdaptationSettingsService(session).resolve(42)
        assert settings.is_default is True
        assert settings.adaptive_enabled is True
        assert settings.auto_apply is False
        assert settings.sensitivity == "moderate"
        assert settings.min_days_before_workout == 2
        assert settings.tsb_fatigued_threshold == -30.0
        assert settings.tsb_fresh_threshold == 5.0

    def test_defaults_logged(self, session, caplog):
        with caplog.at_level("INFO", logger="app.services.adaptation_settings_service"):
            AdaptationSettingsService(session).resolve(42)
        assert "using defaults" in caplog.text

    def test_stored_settings(self, session):
        session.add(AdaptationSettings(athlete_id=7, sensitivity="aggressive", auto_apply=True))
        session.commit()

        settings = AdaptationSettingsService(session).resolve(7)
        assert settings.is_default is False
        assert settings.sensitivity == "aggressive"
        assert settings.auto_apply is True
