"""Workout repository. Every query takes the owner's user id and filters on it in the same statement."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import func, insert, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise
from app.models.workout import Workout, WorkoutExercise, WorkoutSet
from app.schemas.workout import ExerciseWithSets, WorkoutSetRead, WorkoutWithExercises
from app.services.dates import day_bounds

logger = logging.getLogger(__name__)


@dataclass
class WorkoutData:
    """Validated values written to a workout row."""

    name: str | None
    started_at: datetime
    completed_at: datetime | None = None


async def create_workout(db: AsyncSession, user_id: str, data: WorkoutData) -> Workout:
    workout = Workout(
        user_id=user_id,
        name=data.name,
        started_at=data.started_at,
        completed_at=data.completed_at,
    )
    db.add(workout)
    await db.flush()
    await db.refresh(workout)
    logger.info("Created workout %s for user %s", workout.id, user_id)
    return workout


async def get_workout_by_id(db: AsyncSession, user_id: str, workout_id: int) -> Workout | None:
    """Missing and foreign-owned workouts both come back as None."""
    result = await db.execute(
        select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def update_workout(
    db: AsyncSession, user_id: str, workout_id: int, data: WorkoutData
) -> Workout | None:
    """Single UPDATE ... RETURNING guarded by ownership; None when nothing matched."""
    result = await db.execute(
        update(Workout)
        .where(Workout.id == workout_id, Workout.user_id == user_id)
        .values(name=data.name, started_at=data.started_at, completed_at=data.completed_at)
        .returning(Workout)
    )
    workout = result.scalar_one_or_none()
    if workout is None:
        logger.info("Update skipped: workout %s not found for user %s", workout_id, user_id)
    else:
        logger.info("Updated workout %s for user %s", workout_id, user_id)
    return workout


async def _exercises_with_sets(db: AsyncSession, workout_id: int) -> list[ExerciseWithSets]:
    rows = (
        await db.execute(
            select(
                WorkoutExercise.id.label("workout_exercise_id"),
                WorkoutExercise.order,
                Exercise.id.label("exercise_id"),
                Exercise.name,
            )
            .join(Exercise, WorkoutExercise.exercise_id == Exercise.id)
            .where(WorkoutExercise.workout_id == workout_id)
            .order_by(WorkoutExercise.order)
        )
    ).all()
    if not rows:
        return []

    set_rows = (
        await db.execute(
            select(WorkoutSet)
            .where(WorkoutSet.workout_exercise_id.in_([r.workout_exercise_id for r in rows]))
            .order_by(WorkoutSet.workout_exercise_id, WorkoutSet.set_number)
        )
    ).scalars().all()
    sets_by_entry: dict[int, list[WorkoutSetRead]] = {}
    for s in set_rows:
        sets_by_entry.setdefault(s.workout_exercise_id, []).append(WorkoutSetRead.model_validate(s))

    return [
        ExerciseWithSets(
            id=r.exercise_id,
            workout_exercise_id=r.workout_exercise_id,
            name=r.name,
            order=r.order,
            sets=sets_by_entry.get(r.workout_exercise_id, []),
        )
        for r in rows
    ]


async def _with_exercises(db: AsyncSession, workout: Workout) -> WorkoutWithExercises:
    return WorkoutWithExercises(
        id=workout.id,
        name=workout.name,
        started_at=workout.started_at,
        completed_at=workout.completed_at,
        exercises=await _exercises_with_sets(db, workout.id),
    )


async def get_workouts_by_user_and_date(
    db: AsyncSession, user_id: str, day: date
) -> list[WorkoutWithExercises]:
    """
    Workouts started on `day` (local time) with their exercises in `order`
    and each exercise's sets in `set_number` order.
    Queries run one workout at a time in the request's session; they are not
    a single snapshot, so a concurrent edit can show up half-applied.
    """
    start, next_start = day_bounds(day)
    result = await db.execute(
        select(Workout)
        .where(
            Workout.user_id == user_id,
            Workout.started_at >= start,
            Workout.started_at < next_start,
        )
        .order_by(Workout.started_at, Workout.id)
    )
    return [await _with_exercises(db, w) for w in result.scalars().all()]


async def get_workout_with_exercises(
    db: AsyncSession, user_id: str, workout_id: int
) -> WorkoutWithExercises | None:
    workout = await get_workout_by_id(db, user_id, workout_id)
    if workout is None:
        return None
    return await _with_exercises(db, workout)


async def add_exercise_to_workout(
    db: AsyncSession, user_id: str, workout_id: int, exercise_id: int
) -> WorkoutExercise | None:
    """Append a catalog exercise to an owned workout. None when the workout is not the user's."""
    next_order = (
        select(func.coalesce(func.max(WorkoutExercise.order), 0) + 1)
        .where(WorkoutExercise.workout_id == workout_id)
        .correlate(None)
        .scalar_subquery()
    )
    owned = select(Workout.id, literal(exercise_id), next_order).where(
        Workout.id == workout_id, Workout.user_id == user_id
    )
    result = await db.execute(
        insert(WorkoutExercise)
        .from_select(["workout_id", "exercise_id", "order"], owned)
        .returning(WorkoutExercise.id)
    )
    entry_id = result.scalar_one_or_none()
    if entry_id is None:
        return None
    return await db.get(WorkoutExercise, entry_id)


async def add_set(
    db: AsyncSession,
    user_id: str,
    workout_exercise_id: int,
    reps: int,
    weight: Decimal,
    workout_id: int | None = None,
) -> WorkoutSet | None:
    """Append a set to an exercise of an owned workout (optionally pinned to `workout_id`)."""
    next_number = (
        select(func.coalesce(func.max(WorkoutSet.set_number), 0) + 1)
        .where(WorkoutSet.workout_exercise_id == workout_exercise_id)
        .correlate(None)
        .scalar_subquery()
    )
    owned = (
        select(WorkoutExercise.id, next_number, literal(reps), literal(weight, WorkoutSet.weight.type))
        .join(Workout, WorkoutExercise.workout_id == Workout.id)
        .where(WorkoutExercise.id == workout_exercise_id, Workout.user_id == user_id)
    )
    if workout_id is not None:
        owned = owned.where(Workout.id == workout_id)
    result = await db.execute(
        insert(WorkoutSet)
        .from_select(["workout_exercise_id", "set_number", "reps", "weight"], owned)
        .returning(WorkoutSet.id)
    )
    set_id = result.scalar_one_or_none()
    if set_id is None:
        return None
    return await db.get(WorkoutSet, set_id)
