"""Workout endpoints, scoped to the signed-in user."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import get_current_user_id, get_selected_date, require_user_id
from app.db.session import get_db
from app.schemas.workout import (
    WorkoutExerciseCreate,
    WorkoutExerciseRead,
    WorkoutRead,
    WorkoutSetCreate,
    WorkoutSetRead,
    WorkoutWithExercises,
)
from app.services import exercises as exercise_repo
from app.services import workouts as repo
from app.services.workout_actions import (
    NotFound,
    Unauthorized,
    ValidationFailed,
    create_workout_action,
    update_workout_action,
)

router = APIRouter()


def _outcome_to_response(outcome) -> WorkoutRead:
    if isinstance(outcome, Unauthorized):
        raise HTTPException(status_code=401, detail=outcome.message)
    if isinstance(outcome, ValidationFailed):
        raise HTTPException(status_code=422, detail=outcome.field_errors)
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=404, detail=outcome.message)
    return WorkoutRead.model_validate(outcome.workout)


@router.get("", response_model=list[WorkoutWithExercises])
async def list_workouts_for_date(
    day: date = Depends(get_selected_date),
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Workouts started on `?date=yyyy-MM-dd` (default today) with exercises and sets."""
    return await repo.get_workouts_by_user_and_date(db, user_id, day)


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: dict[str, Any] = Body(...),
    user_id: str | None = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Log a workout from `name`, `started_at` and optional `duration` (minutes)."""
    return _outcome_to_response(await create_workout_action(db, user_id, payload))


@router.get("/{workout_id}", response_model=WorkoutWithExercises)
async def get_workout(
    workout_id: int,
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    workout = await repo.get_workout_with_exercises(db, user_id, workout_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.put("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: int,
    payload: dict[str, Any] = Body(...),
    user_id: str | None = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Replace name, start and completion (from duration) of an owned workout."""
    return _outcome_to_response(await update_workout_action(db, user_id, workout_id, payload))


@router.post("/{workout_id}/exercises", response_model=WorkoutExerciseRead, status_code=201)
async def add_exercise(
    workout_id: int,
    payload: WorkoutExerciseCreate,
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Append a catalog exercise to the workout; it goes after the existing ones."""
    if await exercise_repo.get_exercise(db, payload.exercise_id) is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    entry = await repo.add_exercise_to_workout(db, user_id, workout_id, payload.exercise_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return entry


@router.post(
    "/{workout_id}/exercises/{workout_exercise_id}/sets",
    response_model=WorkoutSetRead,
    status_code=201,
)
async def add_set(
    workout_id: int,
    workout_exercise_id: int,
    payload: WorkoutSetCreate,
    user_id: str = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    workout_set = await repo.add_set(
        db, user_id, workout_exercise_id, payload.reps, payload.weight, workout_id=workout_id
    )
    if workout_set is None:
        raise HTTPException(status_code=404, detail="Workout exercise not found")
    return workout_set
