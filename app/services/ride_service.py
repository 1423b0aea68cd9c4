"""
Ride service.

Stores ride summaries with their estimated training load and computes
the athlete's training form (CTL / ATL / TSB).
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.core.clock import as_utc, day_bounds, utc_date, utcnow
from app.db.repositories.benchmark import BenchmarkRepository
from app.db.repositories.ride import RideRepository
from app.db.repositories.training_zone import TrainingZoneRepository
from app.db.unit_of_work import UnitOfWork
from app.intelligence.load import (DEFAULT_FORM_CONFIG, FormConfig, classify_form, compute_atl, compute_ctl,
                                   compute_tsb, daily_tss_series, estimate_tss, )
from app.intelligence.zones import zone_for_power, zone_number
from app.models.ride import RideSummary
from app.schemas.ride import RideSummaryCreate, RideSummaryResponse, TrainingFormResponse
from app.schemas.zones import ZoneBand
from app.services.adaptation_settings_service import AdaptationSettingsService

logger = logging.getLogger(__name__)


class RideService:
    """Service for ride summaries and training load."""

    def __init__(self, session: Session):
        self.session = session
        self.ride_repo = RideRepository(session)
        self.benchmark_repo = BenchmarkRepository(session)
        self.zone_repo = TrainingZoneRepository(session)
        self.settings_service = AdaptationSettingsService(session)

    def record_ride(self, athlete_id: int, data: RideSummaryCreate) -> RideSummaryResponse:
        """Store a ride with its TSS and, when possible, its zone.

        Power-based TSS needs a current benchmark; otherwise the duration /
        climbing heuristic is used.  Rides without a supplied zone are
        classified from their power against the athlete's zones.
        """
        if data.zone is not None:
            zone_number(data.zone)

        benchmark = self.benchmark_repo.get_current(athlete_id)
        ftp = benchmark.ftp_watts if benchmark else None
        estimate = estimate_tss(data.duration_seconds, ftp, data.normalized_power, data.average_power,
                                data.elevation_gain_m, data.workout_category, )

        zone = data.zone
        power = data.normalized_power or data.average_power
        if zone is None and power and ftp:
            bands = [ZoneBand.model_validate(z) for z in self.zone_repo.get_by_athlete(athlete_id)]
            if bands:
                zone = zone_for_power(power, bands)

        with UnitOfWork(self.session):
            ride = self.ride_repo.create(
                RideSummary(athlete_id=athlete_id, **data.model_dump(exclude={"zone", "recorded_at"}),
                            recorded_at=as_utc(data.recorded_at), zone=zone, tss=estimate.tss,
                            tss_method=estimate.method, ))

        logger.info("Athlete %s: ride %s recorded, TSS %d (%s), zone %s", athlete_id, ride.id, estimate.tss,
                    estimate.method, zone or "unclassified", )
        return RideSummaryResponse.model_validate(ride)

    def training_form(self, athlete_id: int, as_of: Optional[datetime.date] = None,
                      config: Optional[FormConfig] = None, ) -> TrainingFormResponse:
        """Fitness, fatigue and form as of a day, labelled with the athlete's thresholds."""
        cfg = config or DEFAULT_FORM_CONFIG
        as_of = as_of or utcnow().date()
        start = as_of - datetime.timedelta(days=cfg.window_days - 1)

        rides = self.ride_repo.get_by_athlete_range(athlete_id, *day_bounds(start, as_of))
        series = daily_tss_series([(utc_date(r.recorded_at), r.tss or 0) for r in rides], start, as_of)

        ctl = compute_ctl(series, cfg.ctl_days)
        atl = compute_atl(series, cfg.atl_days)
        tsb = compute_tsb(ctl, atl)

        settings = self.settings_service.resolve(athlete_id)
        status = classify_form(tsb, settings.tsb_fatigued_threshold, settings.tsb_fresh_threshold)
        return TrainingFormResponse(as_of=as_of, ctl=ctl, atl=atl, tsb=tsb, status=status,
                                    fatigued_threshold=settings.tsb_fatigued_threshold,
                                    fresh_threshold=settings.tsb_fresh_threshold, )
