from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from curacadet.api.deps import get_db, require_roles, CLINICAL_ROLES
from curacadet.crud import attendance as crud_attendance
from curacadet.schemas.attendance import AttendanceOut, AttendanceUpsert

router = APIRouter()


# GET /api/attendance?cadet_id=1&start_date=2025-12-01&end_date=2025-12-07
@router.get("", response_model=List[AttendanceOut])
def get_attendance(
    cadet_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_attendance.get_attendance_for_cadet(db, cadet_id, start_date, end_date)


# Mark morning and/or evening presence; omitted sessions keep their stored value
@router.post("", response_model=AttendanceOut)
def upsert_attendance(
    record: AttendanceUpsert,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_attendance.upsert_attendance(
        db,
        cadet_id=record.cadet_id,
        day=record.date,
        morning=record.morning,
        evening=record.evening,
    )
