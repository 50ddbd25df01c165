# curacadet/db/models/cadet.py
import json

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from curacadet.db.base import Base


class Cadet(Base):
    __tablename__ = "cadets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    battalion = Column(String(100), nullable=False)
    company = Column(String(50), nullable=False)
    join_date = Column(DateTime, nullable=False)
    academy_number = Column(Integer, nullable=True)

    # Demographics
    height = Column(Integer, nullable=True)  # cm
    weight = Column(Integer, nullable=True)  # kg
    age = Column(Integer, nullable=True)
    course = Column(String(100), nullable=True)
    sex = Column(String(10), nullable=True)
    relegated = Column(String(1), nullable=False, default="N")
    is_foreign = Column(Boolean, nullable=False, default=False)

    # Health parameters, kept as entered (e.g. "24.5", "120/80")
    blood_group = Column(String(10), nullable=True)
    bmi = Column(String(20), nullable=True)
    body_fat = Column(String(20), nullable=True)
    calcaneal_bone_density = Column(String(20), nullable=True)
    bp = Column(String(20), nullable=True)
    pulse = Column(String(20), nullable=True)
    so2 = Column(String(20), nullable=True)
    bca_fat = Column(String(20), nullable=True)
    ecg = Column(String(20), nullable=True)
    temp = Column(String(20), nullable=True)
    smm_kg = Column(String(20), nullable=True)

    # Vaccination status
    covid_dose_1 = Column(Boolean, nullable=False, default=False)
    covid_dose_2 = Column(Boolean, nullable=False, default=False)
    covid_dose_3 = Column(Boolean, nullable=False, default=False)
    hepatitis_b_dose_1 = Column(Boolean, nullable=False, default=False)
    hepatitis_b_dose_2 = Column(Boolean, nullable=False, default=False)
    tetanus_toxoid = Column(Boolean, nullable=False, default=False)
    chicken_pox_dose_1 = Column(Boolean, nullable=False, default=False)
    chicken_pox_dose_2 = Column(Boolean, nullable=False, default=False)
    chicken_pox_suffered = Column(Boolean, nullable=False, default=False)
    yellow_fever = Column(Boolean, nullable=False, default=False)
    past_medical_history = Column(Text, nullable=True)

    # Tests
    endurance_test = Column(String(50), nullable=True)
    agility_test = Column(String(50), nullable=True)
    speed_test = Column(String(50), nullable=True)
    vertical_jump = Column(String(50), nullable=True)
    ball_throw = Column(String(50), nullable=True)
    lower_back_strength = Column(String(50), nullable=True)
    shoulder_dynamometer_left = Column(String(50), nullable=True)
    shoulder_dynamometer_right = Column(String(50), nullable=True)
    hand_grip_dynamometer_left = Column(String(50), nullable=True)
    hand_grip_dynamometer_right = Column(String(50), nullable=True)
    overall_assessment = Column(String(100), nullable=True)

    # Menstrual & medical history (female cadets only)
    menstrual_frequency = Column(String(20), nullable=True)
    menstrual_days = Column(Integer, nullable=True)
    last_menstrual_date = Column(DateTime, nullable=True)
    menstrual_aids_raw = Column("menstrual_aids", Text, nullable=True)
    sexually_active = Column(String(10), nullable=True)
    marital_status = Column(String(20), nullable=True)
    pregnancy_history = Column(Text, nullable=True)
    contraceptive_history = Column(Text, nullable=True)
    surgery_history = Column(Text, nullable=True)
    medical_condition = Column(Text, nullable=True)
    hemoglobin_level = Column(Numeric(4, 2, asdecimal=False), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    medical_records = relationship("MedicalRecord", back_populates="cadet")
    attendance_records = relationship("Attendance", back_populates="cadet")

    @property
    def menstrual_aids(self):
        """A list when stored as a JSON array, otherwise the raw string."""
        raw = self.menstrual_aids_raw
        if raw and raw.startswith("["):
            try:
                return json.loads(raw)
            except ValueError:
                return raw
        return raw

    @menstrual_aids.setter
    def menstrual_aids(self, value):
        if isinstance(value, (list, tuple)):
            self.menstrual_aids_raw = json.dumps(list(value))
        else:
            self.menstrual_aids_raw = value or None
