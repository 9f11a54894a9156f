"""Coach and coach availability models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base
from backend.app.models.enums import DayOfWeek, UserRole, enum_column_type


class Coach(Base):
    __tablename__ = "coaches"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    phone = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.coach.value)
    auth_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True, index=True)
    package_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("User", back_populates="coach")
    availability = relationship(
        "CoachAvailability", back_populates="coach", cascade="all, delete-orphan", order_by="CoachAvailability.id"
    )
    session_links = relationship("SessionCoach", back_populates="coach", cascade="all, delete-orphan")
    time_records = relationship("CoachSessionTime", back_populates="coach", cascade="all, delete-orphan")

    @property
    def available_days(self) -> list[str]:
        return [slot.day_of_week.value for slot in self.availability]


class CoachAvailability(Base):
    __tablename__ = "coach_availability"
    __table_args__ = (UniqueConstraint("coach_id", "day_of_week", name="uq_coach_availability_day"),)

    id = Column(Integer, primary_key=True, index=True)
    coach_id = Column(Integer, ForeignKey("coaches.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(enum_column_type(DayOfWeek, "day_of_week"), nullable=False)

    coach = relationship("Coach", back_populates="availability")
