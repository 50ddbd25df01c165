from datetime import date, datetime

import pytest

from curacadet.core.exceptions import ValidationError
from curacadet.crud import medical_record as crud_record
from curacadet.schemas.medical_record import MedicalRecordCreate
from tests.factories import make_cadet, make_record


def test_create_record_derives_total_days_missed(client, db, headers_for):
    cadet = make_cadet(db)

    response = client.post(
        "/api/medical-records",
        json={
            "cadet_id": cadet.id,
            "date_of_reporting": "2025-09-20T09:00:00",
            "medical_problem": "Ankle Sprain",
            "attend_c": "2",
            "mi_detained": 3,
            "monitoring_case": "Yes",
        },
        headers=headers_for("user"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["total_training_days_missed"] == 5
    assert body["monitoring_case"] is True
    assert body["medical_status"] == "Active"


def test_create_record_requires_fields(db):
    with pytest.raises(ValidationError) as excinfo:
        crud_record.create_medical_record(db, MedicalRecordCreate(cadet_id=1))

    assert excinfo.value.message == "Cadet ID, date of reporting, and medical problem are required"


def test_create_record_for_missing_cadet(client, headers_for):
    response = client.post(
        "/api/medical-records",
        json={"cadet_id": 42, "date_of_reporting": "2025-09-20T09:00:00", "medical_problem": "Cut"},
        headers=headers_for("user"),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Selected cadet does not exist"}



def test_create_record_rejects_unknown_status(client, db, headers_for):
    cadet = make_cadet(db)

    response = client.post(
        "/api/medical-records",
        json={
            "cadet_id": cadet.id,
            "date_of_reporting": "2025-09-20T09:00:00",
            "medical_problem": "Ankle Sprain",
            "medical_status": "Bogus",
        },
        headers=headers_for("user"),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Medical status must be Active or Completed"}
    assert crud_record.get_records_for_cadet(db, cadet.id) == []


@pytest.mark.parametrize(
    "value,expected",
    [(True, True), (False, False), ("Yes", True), ("yes", True), ("true", True), ("No", False), (None, False)],
)
def test_parse_monitoring_case(value, expected):
    assert crud_record.parse_monitoring_case(value) is expected


def test_expired_records_are_completed(db):
    cadet = make_cadet(db)
    due = make_record(db, cadet, date_of_reporting=datetime(2025, 9, 20), attend_c=3)
    running = make_record(db, cadet, date_of_reporting=datetime(2025, 9, 20), attend_c=30)
    no_offset = make_record(db, cadet, date_of_reporting=datetime(2025, 9, 1), attend_c=0)

    completed = crud_record.complete_expired_records(db, today=date(2025, 9, 23))

    assert completed == 1
    assert due.medical_status == "Completed"
    assert running.medical_status == "Active"
    assert no_offset.medical_status == "Active"



def test_completion_defaults_to_local_today(db, monkeypatch):
    cadet = make_cadet(db)
    due = make_record(db, cadet, date_of_reporting=datetime(2025, 9, 20), attend_c=3)
    monkeypatch.setattr(crud_record, "local_today", lambda: date(2025, 9, 23))

    assert crud_record.complete_expired_records(db) == 1
    assert due.medical_status == "Completed"


def test_completed_records_are_never_reactivated(db):
    cadet = make_cadet(db)
    record = make_record(
        db, cadet, date_of_reporting=datetime(2025, 9, 20), attend_c=30, medical_status="Completed"
    )

    assert crud_record.complete_expired_records(db, today=date(2025, 9, 21)) == 0
    assert record.medical_status == "Completed"


def test_list_joins_cadet_and_filters(client, db, headers_for):
    vipin = make_cadet(db, name="Vipin Kumar", academy_number=10001)
    gaurav = make_cadet(db, name="Gaurav Singh", company="Beta")
    make_record(db, vipin, problem="Ankle Sprain", monitoring_case=True)
    make_record(db, gaurav, problem="Minor Cut", medical_status="Completed")
    headers = headers_for("user")

    everything = client.get("/api/medical-records", headers=headers).json()
    assert [(r["name"], r["company"]) for r in everything] == [("Vipin Kumar", "Alpha"), ("Gaurav Singh", "Beta")]

    by_name = client.get("/api/medical-records", params={"search": "vipin"}, headers=headers).json()
    assert [r["medical_problem"] for r in by_name] == ["Ankle Sprain"]

    by_number = client.get("/api/medical-records", params={"search": "10001"}, headers=headers).json()
    assert len(by_number) == 1

    completed = client.get("/api/medical-records", params={"status": "Completed"}, headers=headers).json()
    assert [r["name"] for r in completed] == ["Gaurav Singh"]

    monitoring = client.get("/api/medical-records", params={"status": "monitoring"}, headers=headers).json()
    assert [r["name"] for r in monitoring] == ["Vipin Kumar"]


def test_patch_without_fields(client, db, headers_for):
    record = make_record(db, make_cadet(db))

    response = client.patch(f"/api/medical-records/{record.id}", json={}, headers=headers_for("user"))

    assert response.status_code == 200
    assert response.json() == {"message": "No updates provided"}


def test_patch_updates_only_given_fields(client, db, headers_for):
    record = make_record(db, make_cadet(db), diagnosis="Grade 2 sprain", remarks="Rest")

    response = client.patch(
        f"/api/medical-records/{record.id}",
        json={"remarks": "Physiotherapy advised", "medical_problem": None},
        headers=headers_for("user"),
    )

    body = response.json()
    assert body["remarks"] == "Physiotherapy advised"
    assert body["diagnosis"] == "Grade 2 sprain"
    assert body["medical_problem"] == "Ankle Sprain"


def test_put_rejects_unknown_status(client, db, headers_for):
    record = make_record(db, make_cadet(db))

    response = client.put(
        f"/api/medical-records/{record.id}", json={"medical_status": "Closed"}, headers=headers_for("user")
    )

    assert response.status_code == 400


def test_delete_record(client, db, headers_for):
    record = make_record(db, make_cadet(db))
    headers = headers_for("user")

    assert client.delete(f"/api/medical-records/{record.id}", headers=headers).status_code == 200
    response = client.get(f"/api/medical-records/{record.id}", headers=headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Medical record not found"}


def test_medical_history(client, db, headers_for):
    cadet = make_cadet(db)
    make_record(db, cadet, problem="Ankle Sprain")
    make_record(db, cadet, problem="Viral Fever")
    headers = headers_for("user")

    history = client.get(f"/api/medical-history/{cadet.id}", headers=headers).json()

    assert history["cadet"]["name"] == "Vipin Kumar"
    assert [r["medical_problem"] for r in history["records"]] == ["Ankle Sprain", "Viral Fever"]
    assert client.get("/api/medical-history/999", headers=headers).status_code == 404
