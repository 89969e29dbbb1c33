"""Workout, Exercise and ExerciseSet models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coachhub.core.dates import utcnow
from coachhub.core.enums import ContentType
from coachhub.db.base import Base


class Workout(Base):
    """A named collection of exercises created by a user (usually a trainer)."""

    __tablename__ = "workouts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    creator_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    exercises: Mapped[list["Exercise"]] = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.created_at",
    )
    program_entries: Mapped[list["ProgramWorkout"]] = relationship(
        "ProgramWorkout", back_populates="workout", cascade="all, delete-orphan"
    )


class Exercise(Base):
    """Exercise within a workout, with optional demo media."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_muscle: Mapped[str] = mapped_column(String(100), nullable=False)
    content_type: Mapped[ContentType | None] = mapped_column(Enum(ContentType), nullable=True)
    content_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="exercises")
    exercise_sets: Mapped[list["ExerciseSet"]] = relationship(
        "ExerciseSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="ExerciseSet.set_index",
    )


class ExerciseSet(Base):
    """One set of an exercise, addressed by its 0-based set_index."""

    __tablename__ = "exercise_sets"
    __table_args__ = (UniqueConstraint("exercise_id", "set_index", name="uq_exercise_sets_exercise_index"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    set_index: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)

    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="exercise_sets")
