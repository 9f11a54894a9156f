"""Activity log services for time tracking and session events."""

from sqlalchemy.orm import Session, joinedload

from backend.app.core.time import format_display_datetime
from backend.app.models.activity_log import ActivityLog
from backend.app.models.enums import ActivityType
from backend.app.models.user import User
from backend.app.schemas.activity_log import ActivityLogRead


def log_activity(
    db: Session,
    *,
    user: User,
    session_id: int,
    activity_type: ActivityType,
    description: str,
    coach_id: int | None = None,
) -> ActivityLog:
    """Stage an activity entry in the caller's transaction; the caller commits."""
    entry = ActivityLog(
        user_id=user.id,
        user_type=user.role,
        coach_id=coach_id,
        session_id=session_id,
        activity_type=activity_type,
        activity_description=description,
    )
    db.add(entry)
    return entry


def serialize_activity(entry: ActivityLog) -> ActivityLogRead:
    data = ActivityLogRead.model_validate(entry)
    data.coach_name = entry.coach.name if entry.coach else None
    data.created_at_display = format_display_datetime(entry.created_at)
    return data


def list_recent_activity(
    db: Session, *, limit: int = 10, coach_id: int | None = None, session_id: int | None = None
) -> list[ActivityLogRead]:
    query = db.query(ActivityLog).options(joinedload(ActivityLog.coach))
    if coach_id is not None:
        query = query.filter(ActivityLog.coach_id == coach_id)
    if session_id is not None:
        query = query.filter(ActivityLog.session_id == session_id)
    entries = query.order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc()).limit(limit).all()
    return [serialize_activity(entry) for entry in entries]
