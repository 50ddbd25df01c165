from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from curacadet.api.deps import get_db, require_roles, CLINICAL_ROLES
from curacadet.core.config import local_today
from curacadet.crud import attendance as crud_attendance

router = APIRouter()


# GET /api/dashboard/stats?date=YYYY-MM-DD, defaults to today (IST)
@router.get("/stats")
def get_dashboard_stats(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_attendance.get_daily_stats(db, day or local_today())
