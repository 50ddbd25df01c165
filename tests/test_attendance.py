import threading
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from curacadet.api import dashboard
from curacadet.core.exceptions import NotFoundError, ValidationError
from curacadet.crud import attendance as crud_attendance
from curacadet.db import Attendance, Base
from tests.factories import make_cadet

DAY = date(2025, 12, 6)


def test_requires_cadet_and_date(db):
    with pytest.raises(ValidationError) as excinfo:
        crud_attendance.upsert_attendance(db, None, DAY, morning=True)
    assert excinfo.value.message == "cadet id and date required"

    with pytest.raises(ValidationError):
        crud_attendance.upsert_attendance(db, 1, None, morning=True)


def test_requires_at_least_one_flag(db):
    cadet = make_cadet(db)

    with pytest.raises(ValidationError) as excinfo:
        crud_attendance.upsert_attendance(db, cadet.id, DAY)

    assert excinfo.value.message == "at least one of morning or evening must be supplied"
    assert db.query(Attendance).count() == 0


def test_unknown_cadet_is_rejected(db):
    with pytest.raises(NotFoundError) as excinfo:
        crud_attendance.upsert_attendance(db, 9999, DAY, morning=True)

    assert excinfo.value.message == "Cadet not found"
    assert db.query(Attendance).count() == 0


def test_repeated_upsert_keeps_one_row(db):
    cadet = make_cadet(db)

    crud_attendance.upsert_attendance(db, cadet.id, DAY, morning=True)
    record = crud_attendance.upsert_attendance(db, cadet.id, DAY, morning=True)

    assert db.query(Attendance).filter_by(cadet_id=cadet.id, date=DAY).count() == 1
    assert record.morning is True
    assert record.evening is False


def test_omitted_flag_is_not_reset(db):
    cadet = make_cadet(db)

    crud_attendance.upsert_attendance(db, cadet.id, DAY, morning=True)
    record = crud_attendance.upsert_attendance(db, cadet.id, DAY, evening=True)

    assert record.morning is True
    assert record.evening is True

    record = crud_attendance.upsert_attendance(db, cadet.id, DAY, morning=False)
    assert record.morning is False
    assert record.evening is True


def test_both_flags_overwrite_both_columns(db):
    cadet = make_cadet(db)

    crud_attendance.upsert_attendance(db, cadet.id, DAY, morning=True, evening=True)
    record = crud_attendance.upsert_attendance(db, cadet.id, DAY, morning=False, evening=False)

    assert (record.morning, record.evening) == (False, False)


def test_dates_are_independent(db):
    cadet = make_cadet(db)

    crud_attendance.upsert_attendance(db, cadet.id, DAY, morning=True)
    crud_attendance.upsert_attendance(db, cadet.id, date(2025, 12, 7), evening=True)

    rows = crud_attendance.get_attendance_for_cadet(db, cadet.id)
    assert [(r.date, r.morning, r.evening) for r in rows] == [
        (DAY, True, False),
        (date(2025, 12, 7), False, True),
    ]
    assert len(crud_attendance.get_attendance_for_cadet(db, cadet.id, start_date=date(2025, 12, 7))) == 1


def test_concurrent_disjoint_upserts_both_land(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'attendance.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    with Session() as setup:
        cadet_id = make_cadet(setup).id

    barrier = threading.Barrier(2)
    errors = []

    def mark(**flags):
        session = Session()
        try:
            barrier.wait()
            crud_attendance.upsert_attendance(session, cadet_id, DAY, **flags)
        except Exception as exc:
            errors.append(exc)
        finally:
            session.close()

    threads = [
        threading.Thread(target=mark, kwargs={"morning": True}),
        threading.Thread(target=mark, kwargs={"evening": True}),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    with Session() as check:
        rows = check.query(Attendance).filter_by(cadet_id=cadet_id, date=DAY).all()
        assert len(rows) == 1
        assert (rows[0].morning, rows[0].evening) == (True, True)
    engine.dispose()


def test_attendance_endpoints(client, db, headers_for):
    cadet = make_cadet(db)
    headers = headers_for("user")

    first = client.post(
        "/api/attendance", json={"cadet_id": cadet.id, "date": "2025-12-06", "morning": True}, headers=headers
    )
    second = client.post(
        "/api/attendance", json={"cadet_id": cadet.id, "date": "2025-12-06", "evening": True}, headers=headers
    )

    assert first.status_code == 200
    assert second.json()["morning"] is True
    assert second.json()["evening"] is True

    listing = client.get("/api/attendance", params={"cadet_id": cadet.id}, headers=headers).json()
    assert len(listing) == 1

    missing = client.post("/api/attendance", json={"cadet_id": cadet.id, "date": "2025-12-06"}, headers=headers)
    assert missing.status_code == 400
    assert missing.json() == {"error": "at least one of morning or evening must be supplied"}

    no_cadet = client.get("/api/attendance", headers=headers)
    assert no_cadet.status_code == 400


def test_dashboard_stats_for_a_day(client, db, headers_for):
    present = make_cadet(db, name="Ankush Sharma")
    absent = make_cadet(db, name="Gaurav Singh")
    crud_attendance.upsert_attendance(db, present.id, DAY, morning=True, evening=True)
    crud_attendance.upsert_attendance(db, absent.id, DAY, morning=False)

    response = client.get("/api/dashboard/stats", params={"date": "2025-12-06"}, headers=headers_for("user"))

    body = response.json()
    assert body["stats"] == {"morning": 1, "evening": 1, "total": 2}
    assert [a["name"] for a in body["attendees"]] == ["Ankush Sharma"]
    assert body["attendees"][0]["attendance_status"] == {"morning": True, "evening": True}


def test_attendance_for_unknown_cadet_endpoint(client, db, headers_for):
    response = client.post(
        "/api/attendance", json={"cadet_id": 9999, "date": "2025-12-06", "morning": True}, headers=headers_for("user")
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Cadet not found"}
    assert db.query(Attendance).count() == 0


def test_database_error_becomes_structured_response(client, db, headers_for, monkeypatch):
    cadet = make_cadet(db)

    def violate_foreign_key(*args, **kwargs):
        raise IntegrityError(
            "INSERT INTO attendance ...",
            {},
            Exception('insert or update on table "attendance" violates foreign key constraint'),
        )

    monkeypatch.setattr(crud_attendance, "upsert_attendance", violate_foreign_key)

    response = client.post(
        "/api/attendance", json={"cadet_id": cadet.id, "date": "2025-12-06", "morning": True}, headers=headers_for("user")
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": 'insert or update on table "attendance" violates foreign key constraint',
        "detail": "SQL Execution Failed",
    }


def test_dashboard_defaults_to_local_today(client, db, headers_for, monkeypatch):
    cadet = make_cadet(db)
    crud_attendance.upsert_attendance(db, cadet.id, DAY, evening=True)
    monkeypatch.setattr(dashboard, "local_today", lambda: DAY)

    body = client.get("/api/dashboard/stats", headers=headers_for("user")).json()

    assert body["date"] == "2025-12-06"
    assert body["stats"] == {"morning": 0, "evening": 1, "total": 1}
