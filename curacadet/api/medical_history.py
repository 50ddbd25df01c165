from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from curacadet.api.deps import get_db, require_roles, CLINICAL_ROLES
from curacadet.crud import cadet as crud_cadet
from curacadet.crud import medical_record as crud_record
from curacadet.schemas.medical_record import MedicalHistory

router = APIRouter()


# Cadet profile plus every medical record it has
@router.get("/{cadet_id}", response_model=MedicalHistory)
def get_medical_history(
    cadet_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*CLINICAL_ROLES)),
):
    crud_record.complete_expired_records(db)
    cadet = crud_cadet.get_cadet(db, cadet_id)
    return {
        "cadet": cadet,
        "records": crud_record.get_records_for_cadet(db, cadet_id),
    }
