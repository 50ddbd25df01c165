from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional, Union

from curacadet.schemas.cadet import CadetOut


class MedicalRecordFields(BaseModel):
    cadet_id: Optional[int] = None
    date_of_reporting: Optional[datetime] = None
    medical_problem: Optional[str] = None
    diagnosis: Optional[str] = None
    medical_status: Optional[str] = None
    attend_c: Optional[int] = None
    mi_detained: Optional[int] = None
    ex_ppg: Optional[int] = None
    attend_b: Optional[int] = None
    physiotherapy: Optional[int] = None
    total_training_days_missed: Optional[int] = None
    # the registration form sends "Yes"/"No"
    monitoring_case: Union[bool, str, None] = None
    contact_no: Optional[str] = None
    remarks: Optional[str] = None


class MedicalRecordCreate(MedicalRecordFields):
    pass


class MedicalRecordUpdate(MedicalRecordFields):
    pass


class MedicalRecordOut(BaseModel):
    id: int
    cadet_id: int
    date_of_reporting: datetime
    medical_problem: str
    diagnosis: Optional[str] = None
    medical_status: str
    attend_c: int
    mi_detained: int
    ex_ppg: int
    attend_b: int
    physiotherapy: int
    total_training_days_missed: int
    monitoring_case: bool
    contact_no: Optional[str] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MedicalRecordListItem(MedicalRecordOut):
    """A record joined with the cadet it belongs to."""

    name: str
    company: str
    battalion: str
    academy_number: Optional[int] = None


class MedicalHistory(BaseModel):
    cadet: CadetOut
    records: List[MedicalRecordOut]
