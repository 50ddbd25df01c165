# curacadet/core/config.py
from datetime import date, datetime, timedelta, timezone
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SECRET_KEY: str = "your-super-secret-jwt-key-change-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    DATABASE_URL: str = "sqlite:///./curacadet.db"

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    LOG_LEVEL: str = "INFO"

    # Backfilled academy numbers are ACADEMY_NUMBER_BASE + cadet id
    ACADEMY_NUMBER_BASE: int = 10000
    ADMIN_TABLE_ROW_LIMIT: int = 100

    # "Today" for the dashboard and record auto-completion is computed in IST
    LOCAL_UTC_OFFSET_MINUTES: int = 330

    class Config:
        env_file = ".env"


settings = Settings()


def local_today() -> date:
    offset = timedelta(minutes=settings.LOCAL_UTC_OFFSET_MINUTES)
    return (datetime.now(timezone.utc) + offset).date()
