"""Recent activity feed."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_coach_record, get_current_user
from backend.app.models.user import User
from backend.app.schemas.activity_log import ActivityLogRead
from backend.app.services.activity_log import list_recent_activity

router = APIRouter(prefix="/activity-logs", tags=["activity-logs"])


@router.get("/", response_model=list[ActivityLogRead])
async def list_activity_logs(
    limit: int = Query(default=10, ge=1, le=100),
    session_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if current_user.is_admin:
        return list_recent_activity(db, limit=limit, session_id=session_id)

    coach = get_current_coach_record(db, current_user)
    if coach is None:
        return []
    return list_recent_activity(db, limit=limit, coach_id=coach.id, session_id=session_id)
