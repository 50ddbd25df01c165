from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from curacadet.api.deps import get_db, require_roles, SUPER_ADMIN_ROLES
from curacadet.crud import insights as crud_insights
from curacadet.crud import medical_record as crud_record

router = APIRouter(dependencies=[Depends(require_roles(*SUPER_ADMIN_ROLES))])


@router.get("/stats")
def get_insight_stats(db: Session = Depends(get_db)):
    crud_record.complete_expired_records(db)
    return crud_insights.get_insight_stats(db)


# type: all (default), sick, healthy, never_reported
@router.get("/drilldown")
def get_drilldown(
    company: Optional[str] = None,
    kind: Optional[str] = Query(None, alias="type"),
    db: Session = Depends(get_db),
):
    return {"cadets": crud_insights.get_drilldown(db, company, kind)}
