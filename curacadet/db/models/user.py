from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from curacadet.db.base import Base

ROLES = ("admin", "user", "super_admin")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    email = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="user")  # admin / user / super_admin
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
