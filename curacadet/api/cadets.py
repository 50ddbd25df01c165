# curacadet/api/cadets.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from curacadet.api.deps import get_db, require_roles, CLINICAL_ROLES, ADMIN_ROLES
from curacadet.crud import cadet as crud_cadet
from curacadet.schemas.cadet import CadetCreate, CadetUpdate, CadetOut, CadetFilters

router = APIRouter()


@router.get("", response_model=List[CadetOut])
def get_cadets(
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_cadet.list_cadets(db)


# Only admins register cadets
@router.post("", response_model=CadetOut, status_code=201)
def create_cadet(
    cadet_in: CadetCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    return crud_cadet.create_cadet(db, cadet_in)


@router.get("/battalions")
def get_battalions(
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return {"battalions": crud_cadet.list_battalions(db)}


@router.get("/filters", response_model=CadetFilters)
def get_filters(
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_cadet.get_filters(db)


@router.get("/{cadet_id}", response_model=CadetOut)
def get_cadet(
    cadet_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_cadet.get_cadet(db, cadet_id)


@router.put("/{cadet_id}", response_model=CadetOut)
def update_cadet(
    cadet_id: int,
    cadet_in: CadetUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_cadet.update_cadet(db, cadet_id, cadet_in)


@router.patch("/{cadet_id}", response_model=CadetOut)
def patch_cadet(
    cadet_id: int,
    cadet_in: CadetUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_cadet.update_cadet(db, cadet_id, cadet_in, partial=True)


@router.delete("/{cadet_id}")
def delete_cadet(
    cadet_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    deleted = crud_cadet.delete_cadet(db, cadet_id)
    return {
        "message": "Cadet and associated medical records deleted successfully",
        "deleted_cadet": deleted,
    }
