"""Training session endpoints for Courtside Admin."""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session, selectinload

from backend.app.core.cache import invalidate
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_coach_record, get_current_user
from backend.app.models.enums import SessionStatus
from backend.app.models.session import SessionCoach, TrainingSession
from backend.app.models.user import User
from backend.app.schemas.session import (
    ConflictCheckRequest,
    ConflictCheckResponse,
    SessionCreate,
    SessionRead,
    SessionUpdate,
)
from backend.app.services.export import XLSX_MEDIA_TYPE, build_sessions_workbook, sessions_export_filename
from backend.app.services.scheduling import check_scheduling_conflicts
from backend.app.services.sessions import (
    assert_no_conflicts,
    ensure_references_exist,
    ensure_session_access,
    ensure_status_transition,
    get_session_or_404,
    load_schedule,
    set_session_coaches,
    set_session_participants,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("/conflicts", response_model=ConflictCheckResponse)
async def check_conflicts(
    request: ConflictCheckRequest, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    if request.end_time <= request.start_time:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="end_time must be after start_time")
    conflicts = check_scheduling_conflicts(
        db,
        request.date,
        request.start_time,
        request.end_time,
        request.coach_ids,
        request.student_ids,
        session_id=request.session_id,
    )
    return ConflictCheckResponse(has_conflicts=bool(conflicts), conflicts=conflicts)


@router.post("/", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def create_session(session_in: SessionCreate, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    ensure_references_exist(db, session_in.branch_id, session_in.coach_ids, session_in.student_ids)
    if session_in.status != SessionStatus.cancelled:
        assert_no_conflicts(
            db,
            session_date=session_in.date,
            start_time=session_in.start_time,
            end_time=session_in.end_time,
            coach_ids=session_in.coach_ids,
            student_ids=session_in.student_ids,
            force=session_in.force,
        )

    session_obj = TrainingSession(
        date=session_in.date,
        start_time=session_in.start_time,
        end_time=session_in.end_time,
        branch_id=session_in.branch_id,
        status=session_in.status,
        notes=session_in.notes,
        package_type=session_in.package_type,
    )
    set_session_coaches(session_obj, session_in.coach_ids)
    set_session_participants(session_obj, session_in.student_ids)
    db.add(session_obj)
    db.commit()
    db.refresh(session_obj)
    invalidate("sessions", "attendance")
    logger.info("Scheduled session %s on %s", session_obj.id, session_obj.date)
    return session_obj


@router.get("/", response_model=list[SessionRead])
async def list_sessions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    branch_id: Optional[int] = None,
    status_filter: Optional[SessionStatus] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(TrainingSession).options(
        selectinload(TrainingSession.coach_links), selectinload(TrainingSession.participants)
    )
    if not current_user.is_admin:
        coach = get_current_coach_record(db, current_user)
        if coach is None:
            return []
        query = query.filter(TrainingSession.coach_links.any(SessionCoach.coach_id == coach.id))
    if start_date is not None:
        query = query.filter(TrainingSession.date >= start_date)
    if end_date is not None:
        query = query.filter(TrainingSession.date <= end_date)
    if branch_id is not None:
        query = query.filter(TrainingSession.branch_id == branch_id)
    if status_filter is not None:
        query = query.filter(TrainingSession.status == status_filter)
    return query.order_by(TrainingSession.date.desc(), TrainingSession.start_time.desc()).all()


@router.get("/export")
async def export_sessions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    branch_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="end_date must not be before start_date")

    coach_id = None
    if not current_user.is_admin:
        coach = get_current_coach_record(db, current_user)
        if coach is None:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No coach profile is linked to this account")
        coach_id = coach.id

    entries = load_schedule(db, start_date=start_date, end_date=end_date, branch_id=branch_id, coach_id=coach_id)
    filename = sessions_export_filename(start_date, end_date)
    logger.info("Exporting %s sessions to %s", len(entries), filename)
    return Response(
        content=build_sessions_workbook(entries),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    session_obj = get_session_or_404(db, session_id)
    ensure_session_access(db, current_user, session_obj)
    return session_obj


@router.put("/{session_id}", response_model=SessionRead)
async def update_session(
    session_id: int,
    session_in: SessionUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    session_obj = get_session_or_404(db, session_id)
    ensure_references_exist(db, session_in.branch_id, session_in.coach_ids, session_in.student_ids)

    new_date = session_in.date or session_obj.date
    new_start = session_in.start_time or session_obj.start_time
    new_end = session_in.end_time or session_obj.end_time
    new_status = session_in.status or session_obj.status
    ensure_status_transition(session_obj.status, new_status)
    coach_ids = session_in.coach_ids if session_in.coach_ids is not None else session_obj.coach_ids
    student_ids = session_in.student_ids if session_in.student_ids is not None else session_obj.student_ids

    if new_end <= new_start:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="end_time must be after start_time")
    if new_status != SessionStatus.cancelled:
        assert_no_conflicts(
            db,
            session_date=new_date,
            start_time=new_start,
            end_time=new_end,
            coach_ids=coach_ids,
            student_ids=student_ids,
            exclude_session_id=session_obj.id,
            force=session_in.force,
        )

    update_fields = {
        "date": session_in.date,
        "start_time": session_in.start_time,
        "end_time": session_in.end_time,
        "branch_id": session_in.branch_id,
        "status": session_in.status,
        "notes": session_in.notes,
        "package_type": session_in.package_type,
    }
    for field, value in update_fields.items():
        if value is not None:
            setattr(session_obj, field, value)
    if session_in.coach_ids is not None:
        set_session_coaches(session_obj, session_in.coach_ids)
    if session_in.student_ids is not None:
        set_session_participants(session_obj, session_in.student_ids)
    db.commit()
    db.refresh(session_obj)
    invalidate("sessions", "attendance")
    return session_obj


@router.delete("/{session_id}")
async def delete_session(session_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    session_obj = get_session_or_404(db, session_id)
    db.delete(session_obj)
    db.commit()
    invalidate("sessions", "attendance", "time_records")
    return {"status": "deleted", "id": session_id}
