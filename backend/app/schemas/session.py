"""Training session schemas for Courtside Admin."""

import datetime as dt
from datetime import date, datetime, time
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from backend.app.models.enums import SessionStatus


def _dedupe(ids: list[int]) -> list[int]:
    return list(dict.fromkeys(ids))


class SessionBase(BaseModel):
    date: date
    start_time: time
    end_time: time
    branch_id: int
    status: SessionStatus = SessionStatus.scheduled
    notes: Optional[str] = None
    package_type: Optional[str] = None


class SessionCreate(SessionBase):
    coach_ids: List[int] = Field(min_length=1)
    student_ids: List[int] = Field(min_length=1)
    # Proceed even when the conflict check reports overlaps.
    force: bool = False

    @field_validator("coach_ids", "student_ids")
    @classmethod
    def dedupe_ids(cls, value):
        return _dedupe(value)

    @model_validator(mode="after")
    def check_time_range(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class SessionUpdate(BaseModel):
    date: Optional[dt.date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    branch_id: Optional[int] = None
    status: Optional[SessionStatus] = None
    notes: Optional[str] = None
    package_type: Optional[str] = None
    coach_ids: Optional[List[int]] = Field(default=None, min_length=1)
    student_ids: Optional[List[int]] = Field(default=None, min_length=1)
    force: bool = False

    @field_validator("coach_ids", "student_ids")
    @classmethod
    def dedupe_ids(cls, value):
        return _dedupe(value) if value is not None else value


class SessionRead(SessionBase):
    id: int
    coach_ids: List[int] = []
    student_ids: List[int] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NamedRef(BaseModel):
    id: int
    name: str


class ScheduleEntry(BaseModel):
    id: int
    date: date
    start_time: time
    end_time: time
    status: SessionStatus
    branch_id: int
    branch_name: str
    package_type: Optional[str] = None
    notes: Optional[str] = None
    coaches: List[NamedRef] = []
    students: List[NamedRef] = []


class ConflictCheckRequest(BaseModel):
    date: date
    start_time: time
    end_time: time
    # Accept either a single coach id or a list of them.
    coach_ids: Union[int, List[int]] = []
    student_ids: List[int] = []
    session_id: Optional[int] = None

    @field_validator("coach_ids")
    @classmethod
    def normalize_coach_ids(cls, value):
        if isinstance(value, int):
            return [value]
        return value


class Conflict(BaseModel):
    conflict_type: Literal["coach", "student"]
    conflict_details: str


class ConflictCheckResponse(BaseModel):
    has_conflicts: bool
    conflicts: List[Conflict]
