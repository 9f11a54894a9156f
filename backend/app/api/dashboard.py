"""Dashboard overview endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_coach_record, get_current_user
from backend.app.models.user import User
from backend.app.schemas.dashboard import CoachDashboardStats, DashboardStats
from backend.app.services.dashboard_service import get_coach_dashboard_stats, get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    return get_dashboard_stats(db)


@router.get("/coach-stats", response_model=CoachDashboardStats)
async def get_coach_stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    coach = get_current_coach_record(db, current_user)
    if coach is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No coach profile is linked to this account")
    return get_coach_dashboard_stats(db, coach)
