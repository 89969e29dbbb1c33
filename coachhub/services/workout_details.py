"""Derive the "do this workout" view and set-based progress from stored exercise sets."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coachhub.core.constants import (
    DEFAULT_REPS_RANGE,
    DEFAULT_SETS_PER_EXERCISE,
    DEFAULT_WORKOUT_DURATION_MINUTES,
)
from coachhub.models.workout import Exercise, ExerciseSet, Workout
from coachhub.schemas.workout import (
    CompletedSetRead,
    WorkoutDetailsRead,
    WorkoutExerciseDetail,
    WorkoutProgressRead,
)


def planned_set_count(sets: Sequence[ExerciseSet]) -> int:
    """Highest set_index + 1, or the default when nothing is logged yet."""
    if not sets:
        return DEFAULT_SETS_PER_EXERCISE
    return max(s.set_index for s in sets) + 1


def build_exercise_detail(exercise: Exercise) -> WorkoutExerciseDetail:
    sets = list(exercise.exercise_sets or [])
    total = planned_set_count(sets)
    avg_weight = sum(s.weight_kg or 0 for s in sets) / len(sets) if sets else 0.0
    if sets:
        reps = [s.reps or 0 for s in sets]
        reps_range = f"{min(reps)}-{max(reps)}"
    else:
        reps_range = DEFAULT_REPS_RANGE

    by_index = {s.set_index: s for s in sets}
    completed_sets = []
    for i in range(total):
        existing = by_index.get(i)
        completed_sets.append(
            CompletedSetRead(
                set_number=i + 1,
                reps=(existing.reps or 0) if existing else 0,
                weight_kg=(existing.weight_kg or avg_weight) if existing else avg_weight,
                completed=existing is not None and (existing.reps or 0) > 0,
            )
        )

    return WorkoutExerciseDetail(
        id=exercise.id,
        name=exercise.name,
        target_muscle=exercise.target_muscle,
        content_type=exercise.content_type,
        content_url=exercise.content_url,
        sets=total,
        reps=reps_range,
        weight_kg=avg_weight,
        completed_sets=completed_sets,
    )


def build_workout_details(workout: Workout) -> WorkoutDetailsRead:
    created = workout.created_at or datetime.now()
    return WorkoutDetailsRead(
        id=workout.id,
        name=workout.name,
        description=f"Workout created on {created.date().isoformat()}",
        duration_minutes=DEFAULT_WORKOUT_DURATION_MINUTES,
        exercises=[build_exercise_detail(e) for e in workout.exercises],
    )


def compute_progress(exercises: Sequence[Exercise]) -> WorkoutProgressRead:
    """Completed sets (reps > 0) over planned sets across all exercises."""
    total = 0
    completed = 0
    for exercise in exercises:
        sets = list(exercise.exercise_sets or [])
        total += planned_set_count(sets)
        completed += sum(1 for s in sets if s.reps and s.reps > 0)
    percentage = (completed / total) * 100 if total > 0 else 0.0
    return WorkoutProgressRead(total_sets=total, completed_sets=completed, percentage=percentage)


async def upsert_set(
    db: AsyncSession,
    exercise_id: uuid.UUID,
    set_number: int,
    reps: int,
    weight_kg: float,
) -> ExerciseSet:
    """Create or update the set at 0-based index set_number - 1."""
    if set_number < 1:
        raise HTTPException(status_code=400, detail="Set number must be 1 or greater")
    result = await db.execute(select(Exercise.id).where(Exercise.id == exercise_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Exercise not found")

    set_index = set_number - 1
    result = await db.execute(
        select(ExerciseSet).where(
            ExerciseSet.exercise_id == exercise_id, ExerciseSet.set_index == set_index
        )
    )
    set_ = result.scalar_one_or_none()
    if set_:
        set_.reps = reps
        set_.weight_kg = weight_kg
    else:
        set_ = ExerciseSet(exercise_id=exercise_id, set_index=set_index, reps=reps, weight_kg=weight_kg)
        db.add(set_)
    await db.flush()
    await db.refresh(set_)
    return set_
