"""Student schemas for Courtside Admin."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class StudentBase(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    branch_id: Optional[int] = None
    package_type: Optional[str] = None
    remaining_sessions: int = Field(default=0, ge=0)
    total_sessions: Optional[int] = Field(default=None, ge=0)


class StudentCreate(StudentBase):
    pass


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    branch_id: Optional[int] = None
    package_type: Optional[str] = None
    remaining_sessions: Optional[int] = Field(default=None, ge=0)
    total_sessions: Optional[int] = Field(default=None, ge=0)


class StudentRead(StudentBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
