# curacadet/api/medical_records.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from curacadet.api.deps import get_db, require_roles, CLINICAL_ROLES
from curacadet.crud import medical_record as crud_record
from curacadet.schemas.medical_record import (
    MedicalRecordCreate,
    MedicalRecordUpdate,
    MedicalRecordOut,
    MedicalRecordListItem,
)

router = APIRouter()


@router.get("", response_model=List[MedicalRecordListItem])
def get_medical_records(
    search: Optional[str] = Query(None, description="Cadet name, academy number, problem or diagnosis"),
    status: Optional[str] = Query(None, description="Active, Completed or monitoring"),
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    crud_record.complete_expired_records(db)
    return crud_record.list_medical_records(db, search=search, status=status)


@router.post("", response_model=MedicalRecordOut, status_code=201)
def create_medical_record(
    record_in: MedicalRecordCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_record.create_medical_record(db, record_in)


@router.get("/{record_id}", response_model=MedicalRecordOut)
def get_medical_record(
    record_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_record.get_medical_record(db, record_id)


@router.put("/{record_id}", response_model=MedicalRecordOut)
def update_medical_record(
    record_id: int,
    record_in: MedicalRecordUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    return crud_record.update_medical_record(db, record_id, record_in)


@router.patch("/{record_id}")
def patch_medical_record(
    record_id: int,
    record_in: MedicalRecordUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    record = crud_record.update_medical_record(db, record_id, record_in, partial=True)
    if record is None:
        return {"message": "No updates provided"}
    return MedicalRecordOut.model_validate(record)


@router.delete("/{record_id}")
def delete_medical_record(
    record_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    crud_record.delete_medical_record(db, record_id)
    return {"message": "Medical record deleted successfully"}
