import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from curacadet.api import (
    admin,
    admin_database,
    admin_insights,
    attendance,
    auth,
    cadets,
    dashboard,
    medical_history,
    medical_records,
)
from curacadet.core.config import settings
from curacadet.core.exceptions import CuracadetError, ExecutionError, describe_engine_error

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CuraCadet")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CuracadetError)
async def curacadet_error_handler(request: Request, exc: CuracadetError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    body = {"error": exc.message}
    if isinstance(exc, ExecutionError):
        body["detail"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=body)


# Database failures outside the SQL console; the request's session is rolled
# back when get_db closes it
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    message, detail = describe_engine_error(exc)
    return await curacadet_error_handler(request, ExecutionError(message, detail))


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(cadets.router, prefix="/api/cadets", tags=["cadets"])
app.include_router(medical_records.router, prefix="/api/medical-records", tags=["medical-records"])
app.include_router(medical_history.router, prefix="/api/medical-history", tags=["medical-records"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])

app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(admin_database.router, prefix="/api/admin/database", tags=["admin"])
app.include_router(admin_insights.router, prefix="/api/admin/insights", tags=["admin"])
