"""Program schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from coachhub.schemas.user import UserSummary
from coachhub.schemas.workout import ExerciseRead


class ProgramCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class ProgramRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    trainer_id: UUID | None = None
    created_at: datetime | None = None


class AssignedProgramRead(ProgramRead):
    """Program seen from the trainee side, with the date they joined it."""

    joined_at: datetime | None = None


class ProgramAssign(BaseModel):
    trainee_id: UUID


class ProgramAssignmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    program_id: UUID
    trainee_id: UUID
    joined_at: datetime | None = None


class ProgramTraineeRead(UserSummary):
    email: str
    joined_at: datetime | None = None


class ClientRead(UserSummary):
    """A trainee of the current trainer, with the trainer's programs they are on."""

    programs: list[ProgramRead] = []


class ProgramWorkoutAdd(BaseModel):
    workout_id: UUID
    order_index: int = Field(0, ge=0)


class ProgramWorkoutLinkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    program_id: UUID
    workout_id: UUID
    order_index: int


class ProgramWorkoutRead(BaseModel):
    """Workout in a program with nested exercises and their sets."""

    id: UUID
    name: str
    image_url: str | None = None
    created_at: datetime | None = None
    creator_id: UUID | None = None
    order_index: int
    exercises: list[ExerciseRead] = []
