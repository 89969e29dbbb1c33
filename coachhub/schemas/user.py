"""User profile, follow and metrics schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from coachhub.core.constants import NAME_MAX_LENGTH, NAME_MIN_LENGTH
from coachhub.core.enums import UserType


class UserRef(BaseModel):
    """Minimal user info for embedding in message and comment responses (no role)."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    profile_image_url: str | None = None


class UserSummary(UserRef):
    """User info for participant, follower and trainee lists."""

    user_type: UserType


class UserRead(UserSummary):
    email: str
    age: int | None = None
    bio: str | None = None
    phone: str | None = None
    follower_count: int = 0
    following_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    bio: str | None = Field(None, max_length=2000)
    phone: str | None = Field(None, max_length=30)
    age: int | None = Field(None, ge=0, le=150)
    profile_image_url: str | None = Field(None, max_length=1000)


class FollowToggleRead(BaseModel):
    following: bool


class UserMetricCreate(BaseModel):
    weight_kg: float | None = Field(None, gt=0, le=1000)
    height_cm: float | None = Field(None, gt=0, le=300)
    date_recorded: datetime | None = None

    @model_validator(mode="after")
    def _require_measurement(self):
        if self.weight_kg is None and self.height_cm is None:
            raise ValueError("Provide weight_kg and/or height_cm")
        return self


class UserMetricRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: UUID
    weight_kg: float | None = None
    height_cm: float | None = None
    date_recorded: datetime | None = None


class MetricsStatsRead(BaseModel):
    current_weight: float | None = None
    weight_change_this_month: float = 0
    current_height: float | None = None
    bmi: float | None = None
    total_entries: int = 0
    first_entry_date: datetime | None = None
