"""Schedule view: sessions in a date range with coach and student names."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.cache import query_cache
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_coach_record, get_current_user
from backend.app.models.user import User
from backend.app.schemas.session import ScheduleEntry
from backend.app.services.sessions import load_schedule

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/", response_model=list[ScheduleEntry])
async def get_schedule(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    branch_id: Optional[int] = None,
    coach_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="end_date must not be before start_date")

    if not current_user.is_admin:
        coach = get_current_coach_record(db, current_user)
        if coach is None:
            return []
        # Coaches only ever see their own sessions.
        coach_id = coach.id

    filters = {"start_date": start_date, "end_date": end_date, "branch_id": branch_id, "coach_id": coach_id}
    return query_cache.get_or_load("schedule", filters, lambda: load_schedule(db, **filters))
