"""User preferences schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserPreferencesBase(BaseModel):
    sidebar_open: bool = False
    timezone: str = "UTC"


class UserPreferencesUpdate(BaseModel):
    sidebar_open: Optional[bool] = None
    timezone: Optional[str] = None


class UserPreferencesRead(UserPreferencesBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
