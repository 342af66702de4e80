"""Repository behaviour: ownership scoping, day boundaries, nested ordering."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.models import Workout, WorkoutSet
from app.services import workouts as repo
from app.services.workouts import WorkoutData

from conftest import OTHER_USER, USER, add_entry, add_exercise, add_workout


@pytest.mark.asyncio
async def test_create_returns_persisted_row(db):
    workout = await repo.create_workout(
        db, USER, WorkoutData(name="Push", started_at=datetime(2024, 1, 15, 10, 0))
    )
    assert workout.id is not None
    assert workout.user_id == USER
    assert workout.completed_at is None
    assert workout.created_at is not None


@pytest.mark.asyncio
async def test_get_by_id_hides_other_users_workout(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))

    assert (await repo.get_workout_by_id(db, USER, workout.id)).id == workout.id
    assert await repo.get_workout_by_id(db, OTHER_USER, workout.id) is None
    assert await repo.get_workout_by_id(db, USER, workout.id + 999) is None


@pytest.mark.asyncio
async def test_update_by_other_user_is_a_no_op(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0), name="Mine")
    data = WorkoutData(name="Hijacked", started_at=datetime(2024, 2, 1, 8, 0))

    assert await repo.update_workout(db, OTHER_USER, workout.id, data) is None

    await db.refresh(workout)
    assert workout.name == "Mine"
    assert workout.started_at == datetime(2024, 1, 15, 10, 0)


@pytest.mark.asyncio
async def test_update_own_workout(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0), name="Old")
    data = WorkoutData(
        name="New",
        started_at=datetime(2024, 1, 16, 9, 0),
        completed_at=datetime(2024, 1, 16, 10, 0),
    )

    updated = await repo.update_workout(db, USER, workout.id, data)

    assert updated is not None
    assert updated.name == "New"
    assert updated.started_at == datetime(2024, 1, 16, 9, 0)
    assert updated.completed_at == datetime(2024, 1, 16, 10, 0)


@pytest.mark.asyncio
async def test_date_scope_includes_last_millisecond_and_excludes_next_midnight(db):
    day = date(2024, 1, 15)
    await add_workout(db, USER, datetime(2024, 1, 14, 23, 59, 59, 999999), name="before")
    await add_workout(db, USER, datetime(2024, 1, 15, 0, 0), name="midnight")
    await add_workout(db, USER, datetime(2024, 1, 15, 23, 59, 59, 999000), name="last ms")
    await add_workout(db, USER, datetime(2024, 1, 16, 0, 0), name="next day")
    await add_workout(db, OTHER_USER, datetime(2024, 1, 15, 12, 0), name="not mine")

    workouts = await repo.get_workouts_by_user_and_date(db, USER, day)

    assert [w.name for w in workouts] == ["midnight", "last ms"]
    for w in workouts:
        assert w.started_at.date() == day


@pytest.mark.asyncio
async def test_empty_day_returns_empty_list(db):
    await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))
    assert await repo.get_workouts_by_user_and_date(db, USER, date(2024, 1, 20)) == []


@pytest.mark.asyncio
async def test_exercises_and_sets_come_back_in_order(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))
    squat = await add_exercise(db, "Back Squat")
    bench = await add_exercise(db, "Bench Press")
    row = await add_exercise(db, "Barbell Row")
    # Inserted out of order on purpose
    await add_entry(db, workout, row, order=3, sets=[(2, 8, "50"), (1, 10, "45")])
    await add_entry(db, workout, squat, order=1, sets=[(3, 5, "100"), (1, 5, "90"), (2, 5, "95")])
    await add_entry(db, workout, bench, order=2)

    [result] = await repo.get_workouts_by_user_and_date(db, USER, date(2024, 1, 15))

    assert [e.name for e in result.exercises] == ["Back Squat", "Bench Press", "Barbell Row"]
    assert [e.order for e in result.exercises] == [1, 2, 3]
    assert [s.set_number for s in result.exercises[0].sets] == [1, 2, 3]
    assert [s.weight for s in result.exercises[0].sets] == [Decimal("90"), Decimal("95"), Decimal("100")]
    assert result.exercises[1].sets == []
    assert [(s.set_number, s.reps) for s in result.exercises[2].sets] == [(1, 10), (2, 8)]
    assert result.exercises[0].id == squat.id


@pytest.mark.asyncio
async def test_get_workout_with_exercises_is_owner_scoped(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))
    await add_entry(db, workout, await add_exercise(db, "Deadlift"), order=1, sets=[(1, 5, "140")])

    detail = await repo.get_workout_with_exercises(db, USER, workout.id)
    assert detail.exercises[0].name == "Deadlift"
    assert await repo.get_workout_with_exercises(db, OTHER_USER, workout.id) is None


@pytest.mark.asyncio
async def test_add_exercise_appends_in_order(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))
    squat = await add_exercise(db, "Back Squat")
    bench = await add_exercise(db, "Bench Press")

    first = await repo.add_exercise_to_workout(db, USER, workout.id, squat.id)
    second = await repo.add_exercise_to_workout(db, USER, workout.id, bench.id)

    assert (first.order, second.order) == (1, 2)
    assert first.workout_id == workout.id
    assert second.exercise_id == bench.id


@pytest.mark.asyncio
async def test_add_exercise_to_foreign_workout_inserts_nothing(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))
    squat = await add_exercise(db, "Back Squat")

    assert await repo.add_exercise_to_workout(db, OTHER_USER, workout.id, squat.id) is None
    detail = await repo.get_workout_with_exercises(db, USER, workout.id)
    assert detail.exercises == []


@pytest.mark.asyncio
async def test_add_set_numbers_sets_and_checks_owner(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))
    entry = await add_entry(db, workout, await add_exercise(db, "Overhead Press"), order=1)

    first = await repo.add_set(db, USER, entry.id, 8, Decimal("40.5"))
    second = await repo.add_set(db, USER, entry.id, 6, Decimal("42.5"), workout_id=workout.id)
    assert (first.set_number, second.set_number) == (1, 2)
    assert second.weight == Decimal("42.50")

    assert await repo.add_set(db, OTHER_USER, entry.id, 5, Decimal("50")) is None
    assert await repo.add_set(db, USER, entry.id, 5, Decimal("50"), workout_id=workout.id + 1) is None
    count = await db.scalar(select(func.count()).select_from(WorkoutSet))
    assert count == 2


@pytest.mark.asyncio
async def test_deleting_workout_cascades_to_exercises_and_sets(db):
    workout = await add_workout(db, USER, datetime(2024, 1, 15, 10, 0))
    await add_entry(db, workout, await add_exercise(db, "Leg Press"), order=1, sets=[(1, 12, "120")])

    await db.delete(workout)
    await db.flush()

    assert await db.scalar(select(func.count()).select_from(Workout)) == 0
    assert await db.scalar(select(func.count()).select_from(WorkoutSet)) == 0
