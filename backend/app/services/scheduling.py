"""Scheduling conflict detection for training sessions.

A coach or student is double-booked when another non-cancelled session on the
same date overlaps the candidate range. Ranges are half-open, so a session
ending at 11:00 does not clash with one starting at 11:00. Branches are not
compared: nobody can be at two locations at once.
"""

import logging
from datetime import date, time
from typing import Iterable, Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.models.coach import Coach
from backend.app.models.enums import SessionStatus
from backend.app.models.session import SessionCoach, SessionParticipant, TrainingSession
from backend.app.models.student import Student
from backend.app.schemas.session import Conflict

logger = logging.getLogger(__name__)


def _overlapping_session_ids(session_date: date, start_time: time, end_time: time, exclude_session_id: Optional[int]):
    stmt = select(TrainingSession.id).where(
        TrainingSession.date == session_date,
        TrainingSession.status != SessionStatus.cancelled,
        TrainingSession.start_time < end_time,
        TrainingSession.end_time > start_time,
    )
    if exclude_session_id is not None:
        stmt = stmt.where(TrainingSession.id != exclude_session_id)
    return stmt


def check_scheduling_conflicts(
    db: Session,
    session_date: date,
    start_time: time,
    end_time: time,
    coach_ids: Union[int, Iterable[int], None],
    student_ids: Iterable[int] | None,
    session_id: Optional[int] = None,
) -> list[Conflict]:
    """Return one conflict per double-booked coach or student, coaches first."""
    if isinstance(coach_ids, int):
        coach_ids = [coach_ids]
    coach_ids = list(dict.fromkeys(coach_ids or []))
    student_ids = list(dict.fromkeys(student_ids or []))

    overlapping = _overlapping_session_ids(session_date, start_time, end_time, session_id)
    conflicts: list[Conflict] = []

    for coach_id in coach_ids:
        clash = (
            db.query(SessionCoach.id)
            .filter(SessionCoach.coach_id == coach_id, SessionCoach.session_id.in_(overlapping))
            .first()
        )
        if clash is None:
            continue
        coach = db.get(Coach, coach_id)
        name = coach.name if coach else f"#{coach_id}"
        conflicts.append(Conflict(conflict_type="coach", conflict_details=f"Coach {name} is already scheduled at this time"))

    for student_id in student_ids:
        clash = (
            db.query(SessionParticipant.id)
            .filter(
                SessionParticipant.student_id == student_id,
                SessionParticipant.session_id.in_(overlapping),
            )
            .first()
        )
        if clash is None:
            continue
        student = db.get(Student, student_id)
        name = student.name if student else f"#{student_id}"
        conflicts.append(
            Conflict(conflict_type="student", conflict_details=f"Student {name} is already scheduled at this time")
        )

    if conflicts:
        logger.info(
            "Scheduling conflicts on %s %s-%s: %s",
            session_date,
            start_time,
            end_time,
            "; ".join(c.conflict_details for c in conflicts),
        )
    return conflicts
