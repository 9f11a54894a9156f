"""Enumerated column types shared by models and schemas."""

import enum

from sqlalchemy import Enum


class AttendanceStatus(str, enum.Enum):
    present = "present"
    absent = "absent"
    pending = "pending"


class SessionStatus(str, enum.Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


class DayOfWeek(str, enum.Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"


class UserRole(str, enum.Enum):
    admin = "admin"
    coach = "coach"


class ActivityType(str, enum.Enum):
    time_in = "time_in"
    time_out = "time_out"
    session_completed = "session_completed"


def enum_column_type(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Store the enum's string values (not member names) with a CHECK constraint."""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        length=20,
        values_callable=lambda members: [member.value for member in members],
    )
