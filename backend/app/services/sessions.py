"""Session scheduling helpers shared by the sessions and schedule routers."""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, selectinload

from backend.app.models.branch import Branch
from backend.app.models.coach import Coach
from backend.app.models.enums import SessionStatus
from backend.app.models.session import SessionCoach, SessionParticipant, TrainingSession
from backend.app.models.student import Student
from backend.app.schemas.session import NamedRef, ScheduleEntry
from backend.app.services.attendance import sync_attendance_records
from backend.app.services.scheduling import check_scheduling_conflicts

logger = logging.getLogger(__name__)


def get_session_or_404(db: Session, session_id: int) -> TrainingSession:
    session_obj = db.query(TrainingSession).filter(TrainingSession.id == session_id).first()
    if not session_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return session_obj


# A completed session is final; a cancelled one can only be put back on the schedule.
ALLOWED_STATUS_TRANSITIONS = {
    SessionStatus.scheduled: {SessionStatus.completed, SessionStatus.cancelled},
    SessionStatus.cancelled: {SessionStatus.scheduled},
    SessionStatus.completed: set(),
}


def ensure_status_transition(current: SessionStatus, new: SessionStatus) -> None:
    if new == current:
        return
    if new not in ALLOWED_STATUS_TRANSITIONS[current]:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot change session status from {current.value} to {new.value}",
        )


def ensure_references_exist(
    db: Session, branch_id: Optional[int], coach_ids: Optional[list[int]], student_ids: Optional[list[int]]
) -> None:
    if branch_id is not None and db.get(Branch, branch_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Branch not found")
    if coach_ids:
        found = {row.id for row in db.query(Coach.id).filter(Coach.id.in_(coach_ids))}
        if len(found) != len(set(coach_ids)):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coach not found")
    if student_ids:
        found = {row.id for row in db.query(Student.id).filter(Student.id.in_(student_ids))}
        if len(found) != len(set(student_ids)):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")


def assert_no_conflicts(
    db: Session,
    *,
    session_date: date,
    start_time,
    end_time,
    coach_ids: list[int],
    student_ids: list[int],
    exclude_session_id: Optional[int] = None,
    force: bool = False,
) -> None:
    """Block the write when anyone is double-booked, unless the caller forces it."""
    conflicts = check_scheduling_conflicts(
        db, session_date, start_time, end_time, coach_ids, student_ids, session_id=exclude_session_id
    )
    if not conflicts:
        return
    if force:
        logger.warning("Saving session despite %d scheduling conflict(s)", len(conflicts))
        return
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "message": "Scheduling conflict",
            "conflicts": [conflict.model_dump() for conflict in conflicts],
        },
    )


def set_session_coaches(session_obj: TrainingSession, coach_ids: list[int]) -> None:
    wanted = set(coach_ids)
    for link in list(session_obj.coach_links):
        if link.coach_id not in wanted:
            session_obj.coach_links.remove(link)
    current = set(session_obj.coach_ids)
    for coach_id in coach_ids:
        if coach_id not in current:
            session_obj.coach_links.append(SessionCoach(coach_id=coach_id))


def set_session_participants(session_obj: TrainingSession, student_ids: list[int]) -> None:
    wanted = set(student_ids)
    for participant in list(session_obj.participants):
        if participant.student_id not in wanted:
            session_obj.participants.remove(participant)
    current = set(session_obj.student_ids)
    for student_id in student_ids:
        if student_id not in current:
            session_obj.participants.append(SessionParticipant(student_id=student_id))
    sync_attendance_records(session_obj, student_ids)


def build_schedule_entry(session_obj: TrainingSession) -> ScheduleEntry:
    return ScheduleEntry(
        id=session_obj.id,
        date=session_obj.date,
        start_time=session_obj.start_time,
        end_time=session_obj.end_time,
        status=session_obj.status,
        branch_id=session_obj.branch_id,
        branch_name=session_obj.branch.name if session_obj.branch else "",
        package_type=session_obj.package_type,
        notes=session_obj.notes,
        coaches=sorted(
            (NamedRef(id=link.coach.id, name=link.coach.name) for link in session_obj.coach_links),
            key=lambda ref: ref.name,
        ),
        students=sorted(
            (NamedRef(id=p.student.id, name=p.student.name) for p in session_obj.participants),
            key=lambda ref: ref.name,
        ),
    )


def load_schedule(
    db: Session,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    branch_id: Optional[int] = None,
    coach_id: Optional[int] = None,
    include_cancelled: bool = True,
) -> list[ScheduleEntry]:
    query = db.query(TrainingSession).options(
        selectinload(TrainingSession.branch),
        selectinload(TrainingSession.coach_links).selectinload(SessionCoach.coach),
        selectinload(TrainingSession.participants).selectinload(SessionParticipant.student),
    )
    if start_date is not None:
        query = query.filter(TrainingSession.date >= start_date)
    if end_date is not None:
        query = query.filter(TrainingSession.date <= end_date)
    if branch_id is not None:
        query = query.filter(TrainingSession.branch_id == branch_id)
    if coach_id is not None:
        query = query.filter(TrainingSession.coach_links.any(SessionCoach.coach_id == coach_id))
    if not include_cancelled:
        query = query.filter(TrainingSession.status != SessionStatus.cancelled)
    sessions = query.order_by(TrainingSession.date.asc(), TrainingSession.start_time.asc()).all()
    return [build_schedule_entry(session_obj) for session_obj in sessions]


def ensure_session_access(db: Session, user, session_obj: TrainingSession) -> None:
    """Admins see every session; coaches only the ones they are assigned to."""
    if user.is_admin:
        return
    coach = db.query(Coach).filter(Coach.auth_id == user.id).first()
    if coach is None or coach.id not in session_obj.coach_ids:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not assigned to this session")
