# curacadet/api/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from curacadet.api.deps import get_db, require_roles
from curacadet.crud import cadet as crud_cadet

router = APIRouter()


# One-shot backfill: cadet without academy number -> ACADEMY_NUMBER_BASE + id
@router.post("/migrate-academy-numbers")
def migrate_academy_numbers(
    db: Session = Depends(get_db),
    current_user=Depends(require_roles("admin", "super_admin")),
):
    updated = crud_cadet.backfill_academy_numbers(db)
    if not updated:
        return {
            "success": True,
            "message": "All cadets already have academy numbers!",
            "updated": 0,
            "cadets": [],
        }

    return {
        "success": True,
        "message": f"Successfully updated {len(updated)} cadets with academy numbers",
        "updated": len(updated),
        "cadets": updated,
    }
