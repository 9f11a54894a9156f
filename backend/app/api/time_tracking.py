"""Coach time-in/time-out endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_coach_record, get_current_user
from backend.app.models.coach import Coach
from backend.app.models.user import User
from backend.app.schemas.time_tracking import TimeActionRequest, TimeRecordRead, TimeTrackingStatus
from backend.app.services.sessions import ensure_session_access, get_session_or_404
from backend.app.services.time_tracking import (
    build_status,
    list_session_time_records,
    record_time_in,
    record_time_out,
    serialize_time_record,
)

router = APIRouter(prefix="/sessions", tags=["time-tracking"])


def _resolve_coach(db: Session, user: User, request: Optional[TimeActionRequest]) -> Coach:
    if request is not None and request.coach_id is not None:
        if not user.is_admin:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can record time for another coach")
        coach = db.get(Coach, request.coach_id)
        if coach is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coach not found")
        return coach

    coach = get_current_coach_record(db, user)
    if coach is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No coach profile is linked to this account")
    return coach


@router.get("/{session_id}/time-tracking/me", response_model=TimeTrackingStatus)
async def get_my_time_tracking(
    session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    session_obj = get_session_or_404(db, session_id)
    ensure_session_access(db, current_user, session_obj)
    coach = get_current_coach_record(db, current_user)
    return build_status(db, session_obj, coach)


@router.post("/{session_id}/time-in", response_model=TimeRecordRead)
async def time_in(
    session_id: int,
    request: Optional[TimeActionRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    session_obj = get_session_or_404(db, session_id)
    coach = _resolve_coach(db, current_user, request)
    record = record_time_in(db, session_obj=session_obj, coach=coach, user=current_user)
    return serialize_time_record(record)


@router.post("/{session_id}/time-out", response_model=TimeRecordRead)
async def time_out(
    session_id: int,
    request: Optional[TimeActionRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    session_obj = get_session_or_404(db, session_id)
    coach = _resolve_coach(db, current_user, request)
    record = record_time_out(db, session_obj=session_obj, coach=coach, user=current_user)
    return serialize_time_record(record)


@router.get("/{session_id}/time-records", response_model=list[TimeRecordRead])
async def list_time_records(
    session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    session_obj = get_session_or_404(db, session_id)
    ensure_session_access(db, current_user, session_obj)
    return list_session_time_records(db, session_id)
