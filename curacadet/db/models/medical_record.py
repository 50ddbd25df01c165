# curacadet/db/models/medical_record.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from curacadet.db.base import Base

STATUS_ACTIVE = "Active"
STATUS_COMPLETED = "Completed"


class MedicalRecord(Base):
    __tablename__ = "medical_records"

    id = Column(Integer, primary_key=True, index=True)
    cadet_id = Column(Integer, ForeignKey("cadets.id"), nullable=False, index=True)

    date_of_reporting = Column(DateTime, nullable=False)
    medical_problem = Column(Text, nullable=False)
    diagnosis = Column(Text, nullable=True)

    # Active -> Completed, manually or once date_of_reporting + attend_c days has passed
    medical_status = Column(String(20), nullable=False, default=STATUS_ACTIVE)

    # Days missed
    attend_c = Column(Integer, nullable=False, default=0)
    mi_detained = Column(Integer, nullable=False, default=0)
    ex_ppg = Column(Integer, nullable=False, default=0)
    attend_b = Column(Integer, nullable=False, default=0)
    physiotherapy = Column(Integer, nullable=False, default=0)
    total_training_days_missed = Column(Integer, nullable=False, default=0)

    monitoring_case = Column(Boolean, nullable=False, default=False)
    contact_no = Column(String(20), nullable=True)
    remarks = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    cadet = relationship("Cadet", back_populates="medical_records")
