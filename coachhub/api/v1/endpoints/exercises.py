"""Exercise lookup, deletion and per-set logging."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coachhub.api.deps import get_current_user
from coachhub.db.session import get_db
from coachhub.models.user import User
from coachhub.models.workout import Exercise
from coachhub.schemas.workout import ExerciseRead, ExerciseSetRead, SetCompletionUpdate
from coachhub.services.workout_details import upsert_set

router = APIRouter()


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Exercise).where(Exercise.id == exercise_id).options(selectinload(Exercise.exercise_sets))
    )
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete an exercise and its sets (workout owner only)."""
    result = await db.execute(
        select(Exercise).where(Exercise.id == exercise_id).options(selectinload(Exercise.workout))
    )
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    if exercise.workout is None or exercise.workout.creator_id != user.id:
        raise HTTPException(status_code=403, detail="You can only modify your own workouts")
    await db.delete(exercise)
    return Response(status_code=204)


@router.put("/{exercise_id}/sets/{set_number}", response_model=ExerciseSetRead)
async def log_set(
    exercise_id: uuid.UUID,
    payload: SetCompletionUpdate,
    set_number: int = Path(..., ge=1),
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Record reps/weight for set number N (1-based); creates the set if it doesn't exist."""
    return await upsert_set(db, exercise_id, set_number, payload.reps, payload.weight_kg)
