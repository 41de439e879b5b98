from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from prono.core.clock import as_utc


class User(BaseModel):
    id: str = Field(..., alias="_id")
    username: str

    # Sum of points over all of the user's predictions, never patched incrementally
    total_points: int = Field(0, ge=0)

    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class UserCreate(BaseModel):
    username: str


class UserResponse(BaseModel):
    id: str
    username: str
    total_points: int
