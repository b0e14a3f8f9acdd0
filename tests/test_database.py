import pytest
from sqlalchemy import select

from registrar import database
from registrar.models.timeslots import Timeslot


@pytest.fixture
def local_sessions(monkeypatch, session_factory):
    monkeypatch.setattr(database, "SessionLocal", session_factory)
    return session_factory


def _days(session_factory):
    with session_factory() as db:
        return db.scalars(select(Timeslot.day_of_week).order_by(Timeslot.timeslot_id)).all()


def test_get_db_commits_on_success(local_sessions):
    with database.get_db() as db:
        db.add(Timeslot(day_of_week="Tuesday", start_time="08:00", end_time="09:00"))

    assert _days(local_sessions) == ["Tuesday"]


def test_get_db_rolls_back_on_error(local_sessions):
    with pytest.raises(RuntimeError):
        with database.get_db() as db:
            db.add(Timeslot(day_of_week="Tuesday", start_time="08:00", end_time="09:00"))
            db.flush()
            raise RuntimeError("boom")

    assert _days(local_sessions) == []


def test_foreign_keys_enforced_on_sqlite(engine):
    with engine.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
