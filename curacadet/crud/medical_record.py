import logging
from datetime import date, timedelta

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from curacadet.core.config import local_today
from curacadet.core.exceptions import NotFoundError, ValidationError
from curacadet.db.models.cadet import Cadet
from curacadet.db.models.medical_record import (
    MedicalRecord,
    STATUS_ACTIVE,
    STATUS_COMPLETED,
)

logger = logging.getLogger(__name__)

TRUTHY_MONITORING = {"yes", "true"}
STATUSES = (STATUS_ACTIVE, STATUS_COMPLETED)
STATUS_FILTERS = {*STATUSES, "monitoring"}


def parse_monitoring_case(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_MONITORING
    return False


def _record_with_cadet(record: MedicalRecord, cadet: Cadet) -> dict:
    item = {column.key: getattr(record, column.key) for column in MedicalRecord.__table__.columns}
    item.update(
        name=cadet.name,
        company=cadet.company,
        battalion=cadet.battalion,
        academy_number=cadet.academy_number,
    )
    return item


def _ensure_cadet_exists(db: Session, cadet_id: int):
    if not db.query(Cadet.id).filter(Cadet.id == cadet_id).first():
        raise ValidationError("Selected cadet does not exist")


def _ensure_valid_status(status):
    if status not in STATUSES:
        raise ValidationError("Medical status must be Active or Completed")


def complete_expired_records(db: Session, today: date | None = None) -> int:
    """Mark Active records Completed once their Attend C period is over.

    A record is due when ``date_of_reporting + attend_c days <= today``.
    Records with no Attend C days are left for manual completion, and a
    Completed record is never reactivated here.
    """
    today = today or local_today()
    candidates = (
        db.query(MedicalRecord)
        .filter(
            MedicalRecord.medical_status == STATUS_ACTIVE,
            MedicalRecord.attend_c > 0,
        )
        .all()
    )

    completed = 0
    for record in candidates:
        due = record.date_of_reporting.date() + timedelta(days=record.attend_c)
        if due <= today:
            record.medical_status = STATUS_COMPLETED
            completed += 1

    if completed:
        db.commit()
        logger.info(f"⏱️ Auto-completed {completed} medical records")
    return completed


def list_medical_records(db: Session, search: str | None = None, status: str | None = None):
    query = (
        db.query(MedicalRecord, Cadet)
        .join(Cadet, MedicalRecord.cadet_id == Cadet.id)
        .order_by(MedicalRecord.created_at, MedicalRecord.id)
    )

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Cadet.name.ilike(pattern),
                cast(Cadet.academy_number, String).ilike(pattern),
                MedicalRecord.medical_problem.ilike(pattern),
                MedicalRecord.diagnosis.ilike(pattern),
            )
        )

    if status and status != "all":
        if status not in STATUS_FILTERS:
            raise ValidationError(f"Unknown status filter: {status}")
        if status == "monitoring":
            query = query.filter(MedicalRecord.monitoring_case.is_(True))
        else:
            query = query.filter(MedicalRecord.medical_status == status)

    return [_record_with_cadet(record, cadet) for record, cadet in query.all()]


def get_medical_record(db: Session, record_id: int) -> MedicalRecord:
    record = db.query(MedicalRecord).filter(MedicalRecord.id == record_id).first()
    if not record:
        raise NotFoundError("Medical record not found")
    return record


def get_records_for_cadet(db: Session, cadet_id: int):
    return (
        db.query(MedicalRecord)
        .filter(MedicalRecord.cadet_id == cadet_id)
        .order_by(MedicalRecord.date_of_reporting, MedicalRecord.id)
        .all()
    )


def create_medical_record(db: Session, record_in) -> MedicalRecord:
    if not record_in.cadet_id or not record_in.date_of_reporting or not record_in.medical_problem:
        raise ValidationError("Cadet ID, date of reporting, and medical problem are required")

    _ensure_cadet_exists(db, record_in.cadet_id)
    status = record_in.medical_status or STATUS_ACTIVE
    _ensure_valid_status(status)

    attend_c = record_in.attend_c or 0
    mi_detained = record_in.mi_detained or 0
    total = record_in.total_training_days_missed
    if not total:
        total = attend_c + mi_detained

    record = MedicalRecord(
        cadet_id=record_in.cadet_id,
        date_of_reporting=record_in.date_of_reporting,
        medical_problem=record_in.medical_problem,
        diagnosis=record_in.diagnosis,
        medical_status=status,
        attend_c=attend_c,
        mi_detained=mi_detained,
        ex_ppg=record_in.ex_ppg or 0,
        attend_b=record_in.attend_b or 0,
        physiotherapy=record_in.physiotherapy or 0,
        total_training_days_missed=total,
        monitoring_case=parse_monitoring_case(record_in.monitoring_case),
        contact_no=record_in.contact_no,
        remarks=record_in.remarks,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"✅ Created medical record id={record.id} for cadet id={record.cadet_id}")
    return record


def update_medical_record(db: Session, record_id: int, record_in, partial: bool = False):
    """Update a record; returns None when a partial update carries no fields."""
    if partial:
        data = {
            field: value
            for field, value in record_in.model_dump(exclude_unset=True).items()
            if value is not None or MedicalRecord.__table__.c[field].nullable
        }
        if not data:
            return None
    else:
        data = record_in.model_dump(exclude_none=True)

    record = get_medical_record(db, record_id)

    if data.get("cadet_id") and data["cadet_id"] != record.cadet_id:
        _ensure_cadet_exists(db, data["cadet_id"])
    if "monitoring_case" in data:
        data["monitoring_case"] = parse_monitoring_case(data["monitoring_case"])
    if "medical_status" in data:
        _ensure_valid_status(data["medical_status"])

    for field, value in data.items():
        setattr(record, field, value)

    db.commit()
    db.refresh(record)
    logger.info(f"🔄 Updated medical record id={record.id}: {sorted(data)}")
    return record


def delete_medical_record(db: Session, record_id: int):
    record = get_medical_record(db, record_id)
    db.delete(record)
    db.commit()
    logger.info(f"🗑️ Deleted medical record id={record_id}")
