"""Workout CRUD plus the session view: details, progress and completion."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coachhub.api.deps import get_current_user
from coachhub.core.dates import utcnow
from coachhub.db.session import get_db
from coachhub.models.user import User
from coachhub.models.workout import Exercise, Workout
from coachhub.schemas.workout import (
    ExerciseCreate,
    ExerciseRead,
    WorkoutCompletionRead,
    WorkoutCreate,
    WorkoutDetailsRead,
    WorkoutProgressRead,
    WorkoutRead,
    WorkoutUpdate,
)
from coachhub.services.workout_details import build_workout_details, compute_progress

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_workout_or_404(db: AsyncSession, workout_id: uuid.UUID, with_exercises: bool = False) -> Workout:
    stmt = select(Workout).where(Workout.id == workout_id)
    if with_exercises:
        stmt = stmt.options(selectinload(Workout.exercises).selectinload(Exercise.exercise_sets))
    result = await db.execute(stmt)
    workout = result.scalar_one_or_none()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


def require_workout_owner(workout: Workout, user: User, action: str = "modify") -> None:
    if workout.creator_id != user.id:
        raise HTTPException(status_code=403, detail=f"You can only {action} your own workouts")


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    workout = Workout(**payload.model_dump(), creator_id=user.id)
    db.add(workout)
    await db.flush()
    await db.refresh(workout)
    return workout


@router.get("", response_model=list[WorkoutRead])
async def list_my_workouts(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Workouts created by the current user, newest first."""
    result = await db.execute(
        select(Workout).where(Workout.creator_id == user.id).order_by(Workout.created_at.desc())
    )
    return list(result.scalars().all())


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_workout_or_404(db, workout_id)


@router.patch("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    workout = await get_workout_or_404(db, workout_id)
    require_workout_owner(workout, user)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(workout, k, v)
    await db.flush()
    await db.refresh(workout)
    return workout


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout with its exercises and sets (and drop it from any program)."""
    workout = await get_workout_or_404(db, workout_id)
    require_workout_owner(workout, user, action="delete")
    await db.delete(workout)
    return Response(status_code=204)


# ── Exercises ────────────────────────────────────────────────────────────

@router.get("/{workout_id}/exercises", response_model=list[ExerciseRead])
async def list_exercises(
    workout_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    workout = await get_workout_or_404(db, workout_id, with_exercises=True)
    return workout.exercises


@router.post("/{workout_id}/exercises", response_model=ExerciseRead, status_code=201)
async def add_exercise(
    workout_id: uuid.UUID,
    payload: ExerciseCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    workout = await get_workout_or_404(db, workout_id)
    require_workout_owner(workout, user)
    exercise = Exercise(workout_id=workout.id, **payload.model_dump())
    db.add(exercise)
    await db.flush()
    result = await db.execute(
        select(Exercise).where(Exercise.id == exercise.id).options(selectinload(Exercise.exercise_sets))
    )
    return result.scalar_one()


# ── Session view ─────────────────────────────────────────────────────────

@router.get("/{workout_id}/details", response_model=WorkoutDetailsRead)
async def get_workout_details(
    workout_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Exercises with planned set count, rep range, average weight and per-set completion."""
    workout = await get_workout_or_404(db, workout_id, with_exercises=True)
    return build_workout_details(workout)


@router.get("/{workout_id}/progress", response_model=WorkoutProgressRead)
async def get_workout_progress(
    workout_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    workout = await get_workout_or_404(db, workout_id, with_exercises=True)
    return compute_progress(workout.exercises)


@router.post("/{workout_id}/complete", response_model=WorkoutCompletionRead)
async def complete_workout(
    workout_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark the session finished. Completion history is not stored yet."""
    workout = await get_workout_or_404(db, workout_id)
    completed_at = utcnow()
    logger.info("Workout %s completed by user %s at %s", workout.id, user.id, completed_at.isoformat())
    return WorkoutCompletionRead(success=True, completed_at=completed_at)
