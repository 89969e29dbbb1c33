"""Program model and its trainee / workout link tables."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coachhub.core.dates import utcnow
from coachhub.db.base import Base


class Program(Base):
    """Ordered collection of workouts authored by a trainer and assigned to trainees."""

    __tablename__ = "programs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    trainer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    trainer: Mapped[Optional["User"]] = relationship("User")
    trainees: Mapped[list["ProgramTrainee"]] = relationship(
        "ProgramTrainee", back_populates="program", cascade="all, delete-orphan"
    )
    workouts: Mapped[list["ProgramWorkout"]] = relationship(
        "ProgramWorkout",
        back_populates="program",
        cascade="all, delete-orphan",
        order_by="ProgramWorkout.order_index",
    )


class ProgramTrainee(Base):
    """Assignment of a trainee to a program."""

    __tablename__ = "program_trainees"

    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True
    )
    trainee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    program: Mapped["Program"] = relationship("Program", back_populates="trainees")
    trainee: Mapped["User"] = relationship("User")


class ProgramWorkout(Base):
    """Workout slot in a program (order only)."""

    __tablename__ = "program_workouts"

    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True
    )
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), primary_key=True
    )
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    program: Mapped["Program"] = relationship("Program", back_populates="workouts")
    workout: Mapped["Workout"] = relationship("Workout", back_populates="program_entries")
