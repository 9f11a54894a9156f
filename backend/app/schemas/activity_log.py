"""Activity log schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from backend.app.models.enums import ActivityType


class ActivityLogRead(BaseModel):
    id: int
    user_id: int
    user_type: str
    coach_id: Optional[int] = None
    coach_name: Optional[str] = None
    session_id: int
    activity_type: ActivityType
    activity_description: str
    created_at: datetime
    created_at_display: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
