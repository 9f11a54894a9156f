"""Attendance endpoints: per-session roster, marking and Excel export."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session, joinedload

from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.attendance import AttendanceRecord
from backend.app.models.student import Student
from backend.app.models.user import User
from backend.app.schemas.attendance import AttendanceRead, AttendanceUpdate
from backend.app.services.attendance import mark_attendance, serialize_attendance
from backend.app.services.export import XLSX_MEDIA_TYPE, attendance_export_filename, build_attendance_workbook
from backend.app.services.sessions import ensure_session_access, get_session_or_404

router = APIRouter(tags=["attendance"])


def _session_attendance(db: Session, session_id: int) -> list[AttendanceRead]:
    records = (
        db.query(AttendanceRecord)
        .options(joinedload(AttendanceRecord.student))
        .join(Student, Student.id == AttendanceRecord.student_id)
        .filter(AttendanceRecord.session_id == session_id)
        .order_by(Student.name.asc(), AttendanceRecord.id.asc())
        .all()
    )
    return [serialize_attendance(record) for record in records]


@router.get("/sessions/{session_id}/attendance", response_model=list[AttendanceRead])
async def list_session_attendance(
    session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    session_obj = get_session_or_404(db, session_id)
    ensure_session_access(db, current_user, session_obj)
    return _session_attendance(db, session_id)


@router.get("/sessions/{session_id}/attendance/export")
async def export_session_attendance(
    session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    session_obj = get_session_or_404(db, session_id)
    ensure_session_access(db, current_user, session_obj)
    content = build_attendance_workbook(session_obj, _session_attendance(db, session_id))
    filename = attendance_export_filename(session_obj)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/attendance/{attendance_id}", response_model=AttendanceRead)
async def update_attendance(
    attendance_id: int,
    update: AttendanceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record = db.query(AttendanceRecord).filter(AttendanceRecord.id == attendance_id).first()
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance record not found")
    ensure_session_access(db, current_user, record.session)
    record = mark_attendance(db, record, update.status)
    return serialize_attendance(record)
