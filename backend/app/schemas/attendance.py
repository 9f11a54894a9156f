"""Attendance schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from backend.app.models.enums import AttendanceStatus


class AttendanceUpdate(BaseModel):
    status: AttendanceStatus


class AttendanceRead(BaseModel):
    id: int
    session_id: int
    student_id: int
    student_name: Optional[str] = None
    package_type: Optional[str] = None
    status: AttendanceStatus
    marked_at: Optional[datetime] = None
    marked_at_display: Optional[str] = None
    remaining_sessions: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
