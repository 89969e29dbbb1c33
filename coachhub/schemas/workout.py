"""Workout, Exercise and ExerciseSet schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from coachhub.core.enums import ContentType


class WorkoutBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(None, max_length=1000)


class WorkoutCreate(WorkoutBase):
    pass


class WorkoutUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    image_url: str | None = Field(None, max_length=1000)


class WorkoutRead(WorkoutBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    creator_id: UUID | None = None
    created_at: datetime | None = None


class ExerciseSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    exercise_id: UUID
    set_index: int
    reps: int | None = None
    weight_kg: float | None = None


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    target_muscle: str = Field(..., min_length=1, max_length=100)
    content_type: ContentType | None = None
    content_url: str | None = Field(None, max_length=1000)


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID
    created_at: datetime | None = None
    exercise_sets: list[ExerciseSetRead] = []


class SetCompletionUpdate(BaseModel):
    """Reps/weight logged for one set. set_number comes from the path (1-based)."""

    reps: int = Field(..., ge=0)
    weight_kg: float = Field(..., ge=0)


class CompletedSetRead(BaseModel):
    set_number: int
    reps: int
    weight_kg: float
    completed: bool


class WorkoutExerciseDetail(BaseModel):
    id: UUID
    name: str
    target_muscle: str
    content_type: ContentType | None = None
    content_url: str | None = None
    sets: int
    reps: str
    weight_kg: float
    completed_sets: list[CompletedSetRead] = []


class WorkoutDetailsRead(BaseModel):
    """Workout as shown on the "do this workout" screen."""

    id: UUID
    name: str
    description: str
    duration_minutes: int
    exercises: list[WorkoutExerciseDetail] = []


class WorkoutProgressRead(BaseModel):
    total_sets: int
    completed_sets: int
    percentage: float


class WorkoutCompletionRead(BaseModel):
    success: bool = True
    completed_at: datetime
