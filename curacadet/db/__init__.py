# curacadet/db/__init__.py
# Importing curacadet.db registers every model on Base.metadata

from curacadet.db.base import Base
from curacadet.db.models.user import User
from curacadet.db.models.cadet import Cadet
from curacadet.db.models.medical_record import MedicalRecord
from curacadet.db.models.attendance import Attendance

__all__ = ["Base", "User", "Cadet", "MedicalRecord", "Attendance"]
