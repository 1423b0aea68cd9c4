"""Tests for the UnitOfWork transaction boundary."""

import pytest
from sqlmodel import select

from app.core.exceptions import StateConsistencyError
from app.db.session import get_session
from app.db.unit_of_work import UnitOfWork
from app.models.progression import ProgressionLevel
from app.models.training_zone import TrainingZone


def _level(zone: str = "tempo") -> ProgressionLevel:
    return ProgressionLevel(athlete_id=1, zone=zone, level=3.0)


class TestUnitOfWork:
    def test_commits_on_success(self, session):
        with UnitOfWork(session):
            session.add(_level())

        session.expunge_all()
        assert len(session.exec(select(ProgressionLevel)).all()) == 1

    def test_rolls_back_on_exception(self, session):
        with pytest.raises(RuntimeError, match="boom"):
            with UnitOfWork(session):
                session.add(_level())
                session.flush()
                raise RuntimeError("boom")

        assert session.exec(select(ProgressionLevel)).all() == []

    def test_rolls_back_every_write_of_the_unit(self, session):
        with pytest.raises(ValueError):
            with UnitOfWork(session):
                session.add(_level("tempo"))
                session.add(_level("threshold"))
                session.flush()
                session.add(TrainingZone(athlete_id=1, zone_name="tempo", zone_number=3, power_min=190,
                                         power_max=218, ftp_percent_min=76, ftp_percent_max=87, lthr_percent_min=84,
                                         lthr_percent_max=94))
                session.flush()
                raise ValueError("late failure")

        assert session.exec(select(ProgressionLevel)).all() == []
        assert session.exec(select(TrainingZone)).all() == []

    def test_unique_violation_becomes_state_error(self, session):
        with UnitOfWork(session):
            session.add(_level())

        with pytest.raises(StateConsistencyError):
            with UnitOfWork(session):
                session.add(_level())

        # Session is usable after the rollback
        with UnitOfWork(session):
            session.add(_level("threshold"))
        assert len(session.exec(select(ProgressionLevel)).all()) == 2

    def test_returns_itself(self, session):
        with UnitOfWork(session) as uow:
            assert uow.session is session


class TestGetSession:
    def test_session_on_given_engine(self, engine):
        with get_session(engine) as session:
            with UnitOfWork(session):
                session.add(_level())

        with get_session(engine) as session:
            assert [lv.zone for lv in session.exec(select(ProgressionLevel)).all()] == ["tempo"]
