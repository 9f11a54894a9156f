"""Student attendance per training session."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base
from backend.app.models.enums import AttendanceStatus, enum_column_type


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (UniqueConstraint("session_id", "student_id", name="uq_attendance_session_student"),)

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        enum_column_type(AttendanceStatus, "attendance_status"), nullable=False, default=AttendanceStatus.pending
    )
    marked_at = Column(DateTime(timezone=True), nullable=True)
    # Set when marking present actually used one of the student's remaining sessions.
    credit_consumed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    session = relationship("TrainingSession", back_populates="attendance_records")
    student = relationship("Student", back_populates="attendance_records")
