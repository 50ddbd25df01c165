from datetime import datetime
from pydantic import BaseModel
from typing import Dict, List, Optional, Union


class CadetFields(BaseModel):
    """Every cadet attribute, all optional; required ones are checked on create."""

    name: Optional[str] = None
    battalion: Optional[str] = None
    company: Optional[str] = None
    join_date: Optional[datetime] = None
    academy_number: Optional[int] = None

    height: Optional[int] = None
    weight: Optional[int] = None
    age: Optional[int] = None
    course: Optional[str] = None
    sex: Optional[str] = None
    relegated: Optional[str] = None
    is_foreign: Optional[bool] = None

    blood_group: Optional[str] = None
    bmi: Optional[str] = None
    body_fat: Optional[str] = None
    calcaneal_bone_density: Optional[str] = None
    bp: Optional[str] = None
    pulse: Optional[str] = None
    so2: Optional[str] = None
    bca_fat: Optional[str] = None
    ecg: Optional[str] = None
    temp: Optional[str] = None
    smm_kg: Optional[str] = None

    covid_dose_1: Optional[bool] = None
    covid_dose_2: Optional[bool] = None
    covid_dose_3: Optional[bool] = None
    hepatitis_b_dose_1: Optional[bool] = None
    hepatitis_b_dose_2: Optional[bool] = None
    tetanus_toxoid: Optional[bool] = None
    chicken_pox_dose_1: Optional[bool] = None
    chicken_pox_dose_2: Optional[bool] = None
    chicken_pox_suffered: Optional[bool] = None
    yellow_fever: Optional[bool] = None
    past_medical_history: Optional[str] = None

    endurance_test: Optional[str] = None
    agility_test: Optional[str] = None
    speed_test: Optional[str] = None
    vertical_jump: Optional[str] = None
    ball_throw: Optional[str] = None
    lower_back_strength: Optional[str] = None
    shoulder_dynamometer_left: Optional[str] = None
    shoulder_dynamometer_right: Optional[str] = None
    hand_grip_dynamometer_left: Optional[str] = None
    hand_grip_dynamometer_right: Optional[str] = None
    overall_assessment: Optional[str] = None

    menstrual_frequency: Optional[str] = None
    menstrual_days: Optional[int] = None
    last_menstrual_date: Optional[datetime] = None
    menstrual_aids: Union[List[str], str, None] = None
    sexually_active: Optional[str] = None
    marital_status: Optional[str] = None
    pregnancy_history: Optional[str] = None
    contraceptive_history: Optional[str] = None
    surgery_history: Optional[str] = None
    medical_condition: Optional[str] = None
    hemoglobin_level: Optional[float] = None


class CadetCreate(CadetFields):
    pass


class CadetUpdate(CadetFields):
    pass


class CadetOut(CadetFields):
    id: int
    name: str
    battalion: str
    company: str
    join_date: datetime
    relegated: str
    is_foreign: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CadetFilters(BaseModel):
    battalions: List[str]
    companies: List[str]
    companies_by_battalion: Dict[str, List[str]]
