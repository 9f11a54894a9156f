"""Coach schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from backend.app.models.enums import DayOfWeek, UserRole


class CoachBase(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    role: UserRole = UserRole.coach
    package_type: Optional[str] = None


class CoachCreate(CoachBase):
    auth_id: Optional[int] = None
    # When set, a login account is created for the coach with this password.
    password: Optional[str] = Field(default=None, min_length=6)
    available_days: List[DayOfWeek] = []


class CoachUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[UserRole] = None
    package_type: Optional[str] = None
    auth_id: Optional[int] = None
    available_days: Optional[List[DayOfWeek]] = None


class CoachRead(CoachBase):
    id: int
    auth_id: Optional[int] = None
    available_days: List[DayOfWeek] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
