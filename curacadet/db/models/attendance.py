# curacadet/db/models/attendance.py
from sqlalchemy import Column, Integer, Boolean, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from curacadet.db.base import Base


class Attendance(Base):
    __tablename__ = "attendance"
    # The upsert in crud.attendance conflicts on this constraint
    __table_args__ = (
        UniqueConstraint("cadet_id", "date", name="attendance_cadet_id_date_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    cadet_id = Column(Integer, ForeignKey("cadets.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)  # calendar day, e.g. 2025-12-06

    morning = Column(Boolean, nullable=False, default=False)
    evening = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    cadet = relationship("Cadet", back_populates="attendance_records")
