"""Attendance services: pending records per participant and marking."""

import logging

from sqlalchemy.orm import Session

from backend.app.core.cache import invalidate
from backend.app.core.time import format_display_datetime, utc_now
from backend.app.models.attendance import AttendanceRecord
from backend.app.models.enums import AttendanceStatus
from backend.app.models.session import TrainingSession
from backend.app.schemas.attendance import AttendanceRead

logger = logging.getLogger(__name__)


def sync_attendance_records(session_obj: TrainingSession, student_ids: list[int]) -> None:
    """Keep exactly one attendance row per participant; new rows start pending."""
    wanted = set(student_ids)
    existing = {record.student_id: record for record in session_obj.attendance_records}
    for student_id, record in existing.items():
        if student_id not in wanted:
            session_obj.attendance_records.remove(record)
    for student_id in student_ids:
        if student_id not in existing:
            session_obj.attendance_records.append(
                AttendanceRecord(student_id=student_id, status=AttendanceStatus.pending)
            )


def mark_attendance(db: Session, record: AttendanceRecord, new_status: AttendanceStatus) -> AttendanceRecord:
    """Set the status and keep the student's remaining session credits in step.

    Marking present consumes one credit when the student has one left; moving
    away from present gives back only a credit that was actually consumed.
    Re-marking with the same status changes nothing.
    """
    previous = record.status
    if previous == new_status:
        return record

    record.status = new_status
    record.marked_at = None if new_status == AttendanceStatus.pending else utc_now()

    student = record.student
    remaining = student.remaining_sessions or 0
    if new_status == AttendanceStatus.present:
        record.credit_consumed = remaining > 0
        if record.credit_consumed:
            student.remaining_sessions = remaining - 1
    elif previous == AttendanceStatus.present:
        if record.credit_consumed:
            student.remaining_sessions = remaining + 1
        record.credit_consumed = False

    db.commit()
    db.refresh(record)
    invalidate("attendance", "students")
    logger.info(
        "Attendance %s for student %s in session %s: %s -> %s",
        record.id,
        record.student_id,
        record.session_id,
        previous.value,
        new_status.value,
    )
    return record


def serialize_attendance(record: AttendanceRecord) -> AttendanceRead:
    data = AttendanceRead.model_validate(record)
    if record.student is not None:
        data.student_name = record.student.name
        data.package_type = record.student.package_type
        data.remaining_sessions = record.student.remaining_sessions
    data.marked_at_display = format_display_datetime(record.marked_at)
    return data
