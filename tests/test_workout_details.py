"""Tests for the workout session view and set-based progress."""

import uuid
from datetime import datetime, timezone

import pytest

from coachhub.models.workout import Exercise, ExerciseSet, Workout
from coachhub.services.workout_details import (
    build_exercise_detail,
    build_workout_details,
    compute_progress,
    planned_set_count,
)


@pytest.fixture
def logged_exercise():
    """Sets 1 and 3 logged, set 2 missing."""
    return Exercise(
        id=uuid.uuid4(),
        name="Bench Press",
        target_muscle="Chest",
        exercise_sets=[
            ExerciseSet(set_index=0, reps=10, weight_kg=50),
            ExerciseSet(set_index=2, reps=8, weight_kg=60),
        ],
    )


@pytest.fixture
def empty_exercise():
    return Exercise(id=uuid.uuid4(), name="Plank", target_muscle="Core", exercise_sets=[])


def test_planned_set_count_defaults_to_three():
    assert planned_set_count([]) == 3


def test_planned_set_count_uses_highest_index(logged_exercise):
    assert planned_set_count(logged_exercise.exercise_sets) == 3


class TestExerciseDetail:
    def test_logged_exercise(self, logged_exercise):
        detail = build_exercise_detail(logged_exercise)
        assert detail.sets == 3
        assert detail.reps == "8-10"
        assert detail.weight_kg == pytest.approx(55)
        assert [s.set_number for s in detail.completed_sets] == [1, 2, 3]
        first, missing, third = detail.completed_sets
        assert (first.reps, first.weight_kg, first.completed) == (10, 50, True)
        assert (missing.reps, missing.weight_kg, missing.completed) == (0, pytest.approx(55), False)
        assert (third.reps, third.weight_kg, third.completed) == (8, 60, True)

    def test_zero_reps_is_not_completed(self):
        exercise = Exercise(
            id=uuid.uuid4(),
            name="Squat",
            target_muscle="Legs",
            exercise_sets=[ExerciseSet(set_index=0, reps=0, weight_kg=100)],
        )
        detail = build_exercise_detail(exercise)
        assert detail.sets == 1
        assert detail.completed_sets[0].completed is False

    def test_exercise_without_sets(self, empty_exercise):
        detail = build_exercise_detail(empty_exercise)
        assert detail.sets == 3
        assert detail.reps == "8-10"
        assert detail.weight_kg == 0
        assert all(not s.completed and s.reps == 0 for s in detail.completed_sets)


def test_workout_details_header(logged_exercise):
    workout = Workout(
        id=uuid.uuid4(),
        name="Push Day",
        created_at=datetime(2026, 4, 2, 8, 30, tzinfo=timezone.utc),
        exercises=[logged_exercise],
    )
    details = build_workout_details(workout)
    assert details.description == "Workout created on 2026-04-02"
    assert details.duration_minutes == 45
    assert len(details.exercises) == 1


def test_progress_counts_sets_with_reps(logged_exercise, empty_exercise):
    progress = compute_progress([logged_exercise, empty_exercise])
    assert progress.total_sets == 6
    assert progress.completed_sets == 2
    assert progress.percentage == pytest.approx(100 * 2 / 6)


def test_progress_with_no_exercises():
    progress = compute_progress([])
    assert (progress.total_sets, progress.completed_sets, progress.percentage) == (0, 0, 0)
