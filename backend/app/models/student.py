"""Student model for Courtside Admin."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    # No ON DELETE rule: a branch cannot be removed while students point at it.
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True, index=True)
    package_type = Column(String, nullable=True)
    remaining_sessions = Column(Integer, nullable=False, default=0)
    total_sessions = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    branch = relationship("Branch", back_populates="students")
    participations = relationship("SessionParticipant", back_populates="student", cascade="all, delete-orphan")
    attendance_records = relationship("AttendanceRecord", back_populates="student", cascade="all, delete-orphan")
