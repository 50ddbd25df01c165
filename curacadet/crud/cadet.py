import logging

from sqlalchemy.orm import Session

from curacadet.core.config import settings
from curacadet.core.exceptions import NotFoundError, ValidationError
from curacadet.db.models.attendance import Attendance
from curacadet.db.models.cadet import Cadet
from curacadet.db.models.medical_record import MedicalRecord

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "battalion", "company", "join_date")


def list_cadets(db: Session):
    return db.query(Cadet).order_by(Cadet.created_at, Cadet.id).all()


def get_cadet(db: Session, cadet_id: int) -> Cadet:
    cadet = db.query(Cadet).filter(Cadet.id == cadet_id).first()
    if not cadet:
        raise NotFoundError("Cadet not found")
    return cadet


def create_cadet(db: Session, cadet_in) -> Cadet:
    data = cadet_in.model_dump(exclude_none=True)
    if any(not data.get(field) for field in REQUIRED_FIELDS):
        raise ValidationError("Name, battalion, company, and join date are required")

    cadet = Cadet(**data)
    db.add(cadet)
    db.commit()
    db.refresh(cadet)
    logger.info(f"✅ Created cadet {cadet.name} (id={cadet.id})")
    return cadet


def update_cadet(db: Session, cadet_id: int, cadet_in, partial: bool = False) -> Cadet:
    """Apply an update to a cadet.

    A full update (PUT) ignores fields sent as null. A partial update (PATCH)
    only touches the fields present in the body, so an explicit null clears
    the value, and an empty body is rejected.
    """
    if partial:
        data = {
            field: value
            for field, value in cadet_in.model_dump(exclude_unset=True).items()
            if value is not None or Cadet.__table__.c[field].nullable
        }
        if not data:
            raise ValidationError("No valid fields to update")
    else:
        data = cadet_in.model_dump(exclude_none=True)

    cadet = get_cadet(db, cadet_id)
    for field, value in data.items():
        setattr(cadet, field, value)

    db.commit()
    db.refresh(cadet)
    logger.info(f"🔄 Updated cadet id={cadet.id}: {sorted(data)}")
    return cadet


def delete_cadet(db: Session, cadet_id: int) -> dict:
    """Delete a cadet with its medical records and attendance in one transaction."""
    cadet = get_cadet(db, cadet_id)
    deleted = {"id": cadet.id, "name": cadet.name}
    try:
        records = (
            db.query(MedicalRecord)
            .filter(MedicalRecord.cadet_id == cadet_id)
            .delete(synchronize_session=False)
        )
        db.query(Attendance).filter(Attendance.cadet_id == cadet_id).delete(
            synchronize_session=False
        )
        db.delete(cadet)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"🗑️ Deleted cadet id={cadet_id} and {records} medical records")
    deleted["deleted_medical_records"] = records
    return deleted


def list_battalions(db: Session) -> list:
    rows = db.query(Cadet.battalion).distinct().all()
    return sorted(row[0] for row in rows)


def get_filters(db: Session) -> dict:
    pairs = db.query(Cadet.battalion, Cadet.company).distinct().all()

    companies_by_battalion = {}
    for battalion, company in pairs:
        companies_by_battalion.setdefault(battalion, set()).add(company)

    return {
        "battalions": sorted(companies_by_battalion),
        "companies": sorted({company for _, company in pairs}),
        "companies_by_battalion": {
            battalion: sorted(companies)
            for battalion, companies in companies_by_battalion.items()
        },
    }


def backfill_academy_numbers(db: Session, base: int | None = None) -> list:
    """Give every cadet without an academy number ``base + id``.

    Cadets that already have a number are never touched, so running this
    again is a no-op.
    """
    base = settings.ACADEMY_NUMBER_BASE if base is None else base
    cadets = (
        db.query(Cadet)
        .filter(Cadet.academy_number.is_(None))
        .order_by(Cadet.id)
        .all()
    )

    updated = []
    for cadet in cadets:
        cadet.academy_number = base + cadet.id
        updated.append({
            "id": cadet.id,
            "name": cadet.name,
            "academy_number": cadet.academy_number,
        })

    db.commit()
    logger.info(f"🎉 Academy number backfill: {len(updated)} cadets updated")
    return updated
