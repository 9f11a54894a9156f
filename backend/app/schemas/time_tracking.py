"""Coach time tracking schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


TimeTrackingState = Literal["unavailable", "not_started", "timed_in", "timed_out"]


class TimeRecordRead(BaseModel):
    id: int
    session_id: int
    coach_id: int
    coach_name: Optional[str] = None
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    time_in_display: Optional[str] = None
    time_out_display: Optional[str] = None
    is_active: bool = False

    model_config = ConfigDict(from_attributes=True)


class TimeTrackingStatus(BaseModel):
    session_id: int
    coach_id: Optional[int] = None
    state: TimeTrackingState
    can_time_in: bool
    can_time_out: bool
    record: Optional[TimeRecordRead] = None


class TimeActionRequest(BaseModel):
    # Admins may record time on behalf of an assigned coach.
    coach_id: Optional[int] = None
