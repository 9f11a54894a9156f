"""Package schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PackageBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    session_count: int = Field(gt=0)
    is_active: bool = True


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    session_count: Optional[int] = Field(default=None, gt=0)
    is_active: Optional[bool] = None


class PackageRead(PackageBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
