"""Programs: authoring, trainee assignment and workout ordering."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coachhub.api.deps import get_current_trainer, get_current_user, get_user_or_404
from coachhub.db.session import get_db
from coachhub.models.program import Program, ProgramTrainee, ProgramWorkout
from coachhub.models.user import User
from coachhub.models.workout import Exercise, Workout
from coachhub.schemas.program import (
    AssignedProgramRead,
    ClientRead,
    ProgramAssign,
    ProgramAssignmentRead,
    ProgramCreate,
    ProgramRead,
    ProgramTraineeRead,
    ProgramWorkoutAdd,
    ProgramWorkoutLinkRead,
    ProgramWorkoutRead,
)
from coachhub.schemas.workout import ExerciseRead

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_program(db: AsyncSession, program_id: uuid.UUID) -> Program:
    result = await db.execute(select(Program).where(Program.id == program_id))
    program = result.scalar_one_or_none()
    if not program:
        raise HTTPException(status_code=404, detail="Program not found")
    return program


async def _get_owned_program(db: AsyncSession, program_id: uuid.UUID, user: User) -> Program:
    program = await _get_program(db, program_id)
    if program.trainer_id != user.id:
        raise HTTPException(status_code=403, detail="You can only manage your own programs")
    return program


@router.post("", response_model=ProgramRead, status_code=201)
async def create_program(
    payload: ProgramCreate,
    trainer: User = Depends(get_current_trainer),
    db: AsyncSession = Depends(get_db),
):
    program = Program(name=payload.name, trainer_id=trainer.id)
    db.add(program)
    await db.flush()
    await db.refresh(program)
    return program


@router.get("", response_model=list[ProgramRead])
async def list_trainer_programs(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Programs authored by the current user, newest first."""
    result = await db.execute(
        select(Program).where(Program.trainer_id == user.id).order_by(Program.created_at.desc())
    )
    return list(result.scalars().all())


@router.get("/assigned", response_model=list[AssignedProgramRead])
async def list_assigned_programs(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Programs the current user follows as a trainee, most recently joined first."""
    result = await db.execute(
        select(ProgramTrainee)
        .where(ProgramTrainee.trainee_id == user.id)
        .options(selectinload(ProgramTrainee.program))
        .order_by(ProgramTrainee.joined_at.desc())
    )
    return [
        AssignedProgramRead(
            id=a.program.id,
            name=a.program.name,
            trainer_id=a.program.trainer_id,
            created_at=a.program.created_at,
            joined_at=a.joined_at,
        )
        for a in result.scalars().all()
    ]


@router.get("/clients", response_model=list[ClientRead])
async def list_clients(
    trainer: User = Depends(get_current_trainer),
    db: AsyncSession = Depends(get_db),
):
    """Distinct trainees across the trainer's programs, each with the programs they are on."""
    result = await db.execute(
        select(ProgramTrainee)
        .join(Program, Program.id == ProgramTrainee.program_id)
        .where(Program.trainer_id == trainer.id)
        .options(selectinload(ProgramTrainee.trainee), selectinload(ProgramTrainee.program))
        .order_by(ProgramTrainee.joined_at)
    )
    clients: dict[uuid.UUID, ClientRead] = {}
    for assignment in result.scalars().all():
        trainee = assignment.trainee
        if trainee is None:
            continue
        if trainee.id not in clients:
            clients[trainee.id] = ClientRead(
                id=trainee.id,
                name=trainee.name,
                profile_image_url=trainee.profile_image_url,
                user_type=trainee.user_type,
            )
        clients[trainee.id].programs.append(ProgramRead.model_validate(assignment.program))
    return sorted(clients.values(), key=lambda c: c.name.lower())


@router.get("/{program_id}", response_model=ProgramRead)
async def get_program(
    program_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _get_program(db, program_id)


# ── Trainees ─────────────────────────────────────────────────────────────

@router.post("/{program_id}/trainees", response_model=ProgramAssignmentRead, status_code=201)
async def assign_program(
    program_id: uuid.UUID,
    payload: ProgramAssign,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Assign a trainee to the program (one assignment per trainee)."""
    await _get_owned_program(db, program_id, user)
    await get_user_or_404(db, payload.trainee_id)
    existing = await db.execute(
        select(ProgramTrainee).where(
            ProgramTrainee.program_id == program_id,
            ProgramTrainee.trainee_id == payload.trainee_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Trainee is already assigned to this program")
    assignment = ProgramTrainee(program_id=program_id, trainee_id=payload.trainee_id)
    db.add(assignment)
    await db.flush()
    await db.refresh(assignment)
    logger.info("Assigned trainee %s to program %s", payload.trainee_id, program_id)
    return assignment


@router.delete("/{program_id}/trainees/{trainee_id}", status_code=204)
async def unassign_program(
    program_id: uuid.UUID,
    trainee_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await _get_owned_program(db, program_id, user)
    result = await db.execute(
        select(ProgramTrainee).where(
            ProgramTrainee.program_id == program_id,
            ProgramTrainee.trainee_id == trainee_id,
        )
    )
    assignment = result.scalar_one_or_none()
    if not assignment:
        raise HTTPException(status_code=404, detail="Trainee is not assigned to this program")
    await db.delete(assignment)
    return Response(status_code=204)


@router.get("/{program_id}/trainees", response_model=list[ProgramTraineeRead])
async def list_program_trainees(
    program_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await _get_program(db, program_id)
    result = await db.execute(
        select(ProgramTrainee)
        .where(ProgramTrainee.program_id == program_id)
        .options(selectinload(ProgramTrainee.trainee))
        .order_by(ProgramTrainee.joined_at)
    )
    return [
        ProgramTraineeRead(
            id=a.trainee.id,
            name=a.trainee.name,
            email=a.trainee.email,
            profile_image_url=a.trainee.profile_image_url,
            user_type=a.trainee.user_type,
            joined_at=a.joined_at,
        )
        for a in result.scalars().all()
        if a.trainee is not None
    ]


# ── Workouts ─────────────────────────────────────────────────────────────

@router.post("/{program_id}/workouts", response_model=ProgramWorkoutLinkRead, status_code=201)
async def add_workout_to_program(
    program_id: uuid.UUID,
    payload: ProgramWorkoutAdd,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await _get_owned_program(db, program_id, user)
    workout = await db.execute(select(Workout.id).where(Workout.id == payload.workout_id))
    if workout.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    existing = await db.execute(
        select(ProgramWorkout).where(
            ProgramWorkout.program_id == program_id,
            ProgramWorkout.workout_id == payload.workout_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Workout is already in this program")
    link = ProgramWorkout(
        program_id=program_id, workout_id=payload.workout_id, order_index=payload.order_index
    )
    db.add(link)
    await db.flush()
    return link


@router.delete("/{program_id}/workouts/{workout_id}", status_code=204)
async def remove_workout_from_program(
    program_id: uuid.UUID,
    workout_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await _get_owned_program(db, program_id, user)
    result = await db.execute(
        select(ProgramWorkout).where(
            ProgramWorkout.program_id == program_id,
            ProgramWorkout.workout_id == workout_id,
        )
    )
    link = result.scalar_one_or_none()
    if not link:
        raise HTTPException(status_code=404, detail="Workout is not in this program")
    await db.delete(link)
    return Response(status_code=204)


@router.get("/{program_id}/workouts", response_model=list[ProgramWorkoutRead])
async def list_program_workouts(
    program_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Workouts in program order, each with its exercises and their sets."""
    await _get_program(db, program_id)
    result = await db.execute(
        select(ProgramWorkout)
        .where(ProgramWorkout.program_id == program_id)
        .options(
            selectinload(ProgramWorkout.workout)
            .selectinload(Workout.exercises)
            .selectinload(Exercise.exercise_sets)
        )
        .order_by(ProgramWorkout.order_index)
    )
    return [
        ProgramWorkoutRead(
            id=link.workout.id,
            name=link.workout.name,
            image_url=link.workout.image_url,
            created_at=link.workout.created_at,
            creator_id=link.workout.creator_id,
            order_index=link.order_index,
            exercises=[ExerciseRead.model_validate(e) for e in link.workout.exercises],
        )
        for link in result.scalars().all()
        if link.workout is not None
    ]
