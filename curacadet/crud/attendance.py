import logging
from datetime import date, datetime, timezone

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from curacadet.core.exceptions import ExecutionError, NotFoundError, ValidationError
from curacadet.db.models.attendance import Attendance
from curacadet.db.models.cadet import Cadet

logger = logging.getLogger(__name__)

# Dialects whose INSERT construct supports ON CONFLICT ... DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _upsert_insert(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return UPSERT_INSERTS[dialect]
    except KeyError:
        raise ExecutionError(f"Attendance upsert is not supported on {dialect}")


def upsert_attendance(
    db: Session,
    cadet_id: int | None,
    day: date | None,
    morning: bool | None = None,
    evening: bool | None = None,
) -> Attendance:
    """Record morning/evening presence for a cadet on a calendar day.

    The first call for a (cadet, day) pair inserts the row, defaulting an
    omitted flag to False. Later calls update only the flags they carry, so
    an omitted flag keeps its stored value. Everything happens in a single
    INSERT ... ON CONFLICT DO UPDATE statement; the attendance row is never
    read before the write, so concurrent requests cannot clobber each other.
    """
    if not cadet_id or not day:
        raise ValidationError("cadet id and date required")
    if morning is None and evening is None:
        raise ValidationError("at least one of morning or evening must be supplied")
    if not db.query(Cadet.id).filter(Cadet.id == cadet_id).first():
        raise NotFoundError("Cadet not found")

    now = datetime.now(timezone.utc)
    insert = _upsert_insert(db)
    stmt = insert(Attendance).values(
        cadet_id=cadet_id,
        date=day,
        morning=bool(morning),
        evening=bool(evening),
        created_at=now,
        updated_at=now,
    )

    changes = {"updated_at": stmt.excluded.updated_at}
    if morning is not None:
        changes["morning"] = stmt.excluded.morning
    if evening is not None:
        changes["evening"] = stmt.excluded.evening

    stmt = stmt.on_conflict_do_update(
        index_elements=[Attendance.cadet_id, Attendance.date],
        set_=changes,
    ).returning(Attendance)

    record = db.execute(
        stmt, execution_options={"populate_existing": True}
    ).scalar_one()
    db.commit()
    db.refresh(record)

    logger.info(
        f"📝 Attendance cadet_id={cadet_id} date={day.isoformat()}: "
        f"morning={record.morning} evening={record.evening}"
    )
    return record


def get_attendance_for_cadet(
    db: Session,
    cadet_id: int | None,
    start_date: date | None = None,
    end_date: date | None = None,
):
    if not cadet_id:
        raise ValidationError("Cadet ID is required")

    query = db.query(Attendance).filter(Attendance.cadet_id == cadet_id)
    if start_date:
        query = query.filter(Attendance.date >= start_date)
    if end_date:
        query = query.filter(Attendance.date <= end_date)
    return query.order_by(Attendance.date).all()


def get_daily_stats(db: Session, day: date) -> dict:
    """Morning/evening head counts for a day plus the cadets who attended."""
    rows = (
        db.query(Attendance, Cadet)
        .outerjoin(Cadet, Attendance.cadet_id == Cadet.id)
        .filter(Attendance.date == day)
        .order_by(Cadet.name)
        .all()
    )

    morning = evening = 0
    attendees = []
    for record, cadet in rows:
        if record.morning:
            morning += 1
        if record.evening:
            evening += 1
        if (record.morning or record.evening) and cadet is not None:
            attendees.append({
                "id": cadet.id,
                "name": cadet.name,
                "battalion": cadet.battalion,
                "company": cadet.company,
                "academy_number": cadet.academy_number,
                "attendance_status": {
                    "morning": record.morning,
                    "evening": record.evening,
                },
            })

    return {
        "date": day.isoformat(),
        "stats": {"morning": morning, "evening": evening, "total": morning + evening},
        "attendees": attendees,
    }
