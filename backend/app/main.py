# Courtside Admin backend entrypoint: training sessions, rosters, attendance and coach time tracking.

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from backend.app.core.settings import get_settings
from backend.app.api import register
from backend.app.api import login
from backend.app.api import branches
from backend.app.api import students
from backend.app.api import coaches
from backend.app.api import packages
from backend.app.api import sessions
from backend.app.api import attendance
from backend.app.api import time_tracking
from backend.app.api import activity_logs
from backend.app.api import dashboard
from backend.app.api import schedule
from backend.app.api import navigation
from backend.app.api import preferences
from backend.app.api import admin_users
from backend.app.core.dev_seed import ensure_default_dev_admin
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

settings = get_settings()
logger = logging.getLogger(__name__)
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(branches.router)
app.include_router(students.router)
app.include_router(coaches.router)
app.include_router(packages.router)
app.include_router(sessions.router)
app.include_router(attendance.router)
app.include_router(time_tracking.router)
app.include_router(activity_logs.router)
app.include_router(dashboard.router)
app.include_router(schedule.router)
app.include_router(navigation.router)
app.include_router(preferences.router)
app.include_router(admin_users.router)


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error while handling %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "A database error occurred; the change was not saved"})


@app.get("/")
def read_root():
    return {"app": "Courtside Admin backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def seed_default_dev_admin():
    db = SessionLocal()
    try:
        ensure_default_dev_admin(db)
    finally:
        db.close()
