"""Coach time-in/time-out workflow.

Each (session, coach) pair moves ``not_started -> timed_in -> timed_out``.
The timestamp write and its activity-log entry are committed together; a
failure rolls back both so a recorded time never lacks its log row.
"""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from backend.app.core.cache import invalidate
from backend.app.core.time import format_display_datetime, utc_now
from backend.app.models.coach import Coach
from backend.app.models.coach_session_time import CoachSessionTime
from backend.app.models.enums import ActivityType, SessionStatus
from backend.app.models.session import TrainingSession
from backend.app.models.user import User
from backend.app.schemas.time_tracking import TimeRecordRead, TimeTrackingStatus
from backend.app.services.activity_log import log_activity

logger = logging.getLogger(__name__)

TIME_IN_DESCRIPTION = "Coach timed in for session"
TIME_OUT_DESCRIPTION = "Coach timed out for session"
SESSION_COMPLETED_DESCRIPTION = "Session marked as completed"


def get_time_record(db: Session, session_id: int, coach_id: int) -> CoachSessionTime | None:
    return (
        db.query(CoachSessionTime)
        .filter(CoachSessionTime.session_id == session_id, CoachSessionTime.coach_id == coach_id)
        .first()
    )


def serialize_time_record(record: CoachSessionTime) -> TimeRecordRead:
    data = TimeRecordRead.model_validate(record)
    data.coach_name = record.coach.name if record.coach else None
    data.time_in_display = format_display_datetime(record.time_in)
    data.time_out_display = format_display_datetime(record.time_out)
    data.is_active = record.time_in is not None and record.time_out is None
    return data


def is_trackable(session_obj: TrainingSession, coach: Coach) -> bool:
    return session_obj.status != SessionStatus.cancelled and coach.id in session_obj.coach_ids


def build_status(db: Session, session_obj: TrainingSession, coach: Coach | None) -> TimeTrackingStatus:
    """Describe which time-tracking action is currently allowed for the coach.

    An action is only offered when the matching POST would succeed, so a
    missing coach profile, an unassigned coach or a cancelled session all
    report ``unavailable`` with both actions disabled.
    """
    session_id = session_obj.id
    if coach is None:
        return TimeTrackingStatus(session_id=session_id, state="unavailable", can_time_in=False, can_time_out=False)

    record = get_time_record(db, session_id, coach.id)
    if not is_trackable(session_obj, coach):
        return TimeTrackingStatus(
            session_id=session_id,
            coach_id=coach.id,
            state="unavailable",
            can_time_in=False,
            can_time_out=False,
            record=serialize_time_record(record) if record is not None else None,
        )

    if record is None or record.time_in is None:
        state = "not_started"
    elif record.time_out is None:
        state = "timed_in"
    else:
        state = "timed_out"

    return TimeTrackingStatus(
        session_id=session_id,
        coach_id=coach.id,
        state=state,
        can_time_in=state == "not_started",
        can_time_out=state == "timed_in",
        record=serialize_time_record(record) if record is not None else None,
    )


def list_session_time_records(db: Session, session_id: int) -> list[TimeRecordRead]:
    records = (
        db.query(CoachSessionTime)
        .options(joinedload(CoachSessionTime.coach))
        .filter(CoachSessionTime.session_id == session_id)
        .order_by(CoachSessionTime.created_at.asc(), CoachSessionTime.id.asc())
        .all()
    )
    return [serialize_time_record(record) for record in records]


def _ensure_trackable(session_obj: TrainingSession, coach: Coach) -> None:
    if session_obj.status == SessionStatus.cancelled:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Cannot record time for a cancelled session")
    if coach.id not in session_obj.coach_ids:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Coach is not assigned to this session")


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent %s rejected by unique constraint", action)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{action} already recorded")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("%s failed", action)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to record {action}")


def record_time_in(db: Session, *, session_obj: TrainingSession, coach: Coach, user: User) -> CoachSessionTime:
    _ensure_trackable(session_obj, coach)
    record = get_time_record(db, session_obj.id, coach.id)
    if record is not None and record.time_in is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Time In already recorded")

    now = utc_now()
    if record is None:
        record = CoachSessionTime(session_id=session_obj.id, coach_id=coach.id)
        db.add(record)
    record.time_in = now
    record.updated_at = now
    log_activity(
        db,
        user=user,
        session_id=session_obj.id,
        activity_type=ActivityType.time_in,
        description=TIME_IN_DESCRIPTION,
        coach_id=coach.id,
    )
    _commit(db, "Time In")
    db.refresh(record)
    invalidate("time_records")
    logger.info("Coach %s timed in for session %s", coach.id, session_obj.id)
    return record


def record_time_out(db: Session, *, session_obj: TrainingSession, coach: Coach, user: User) -> CoachSessionTime:
    _ensure_trackable(session_obj, coach)
    record = get_time_record(db, session_obj.id, coach.id)
    if record is None or record.time_in is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Time In has not been recorded")
    if record.time_out is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Time Out already recorded")

    now = utc_now()
    record.time_out = now
    record.updated_at = now
    log_activity(
        db,
        user=user,
        session_id=session_obj.id,
        activity_type=ActivityType.time_out,
        description=TIME_OUT_DESCRIPTION,
        coach_id=coach.id,
    )
    if session_obj.status != SessionStatus.completed:
        session_obj.status = SessionStatus.completed
        log_activity(
            db,
            user=user,
            session_id=session_obj.id,
            activity_type=ActivityType.session_completed,
            description=SESSION_COMPLETED_DESCRIPTION,
            coach_id=coach.id,
        )
    _commit(db, "Time Out")
    db.refresh(record)
    invalidate("time_records", "sessions")
    logger.info("Coach %s timed out for session %s", coach.id, session_obj.id)
    return record
