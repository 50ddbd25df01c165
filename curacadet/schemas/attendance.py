import datetime as dt
from pydantic import BaseModel
from typing import Optional


class AttendanceUpsert(BaseModel):
    # Optional so that missing fields get the service's own error messages
    cadet_id: Optional[int] = None
    date: Optional[dt.date] = None
    morning: Optional[bool] = None
    evening: Optional[bool] = None


class AttendanceOut(BaseModel):
    id: int
    cadet_id: int
    date: dt.date
    morning: bool
    evening: bool

    class Config:
        from_attributes = True
