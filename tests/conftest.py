"""Shared fixtures: a fresh SQLite database per test, a session on it, and an HTTP client."""

import os
import sys
from datetime import datetime
from decimal import Decimal

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.db.base import Base
from app.db.session import build_engine, build_session_maker, get_db
from app.main import app
from app.models import Exercise, Workout, WorkoutExercise, WorkoutSet

USER = "user_alice"
OTHER_USER = "user_bob"


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(Settings(database_dsn=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return build_session_maker(engine)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def auth(user_id: str = USER) -> dict[str, str]:
    return {"X-User-Id": user_id}


async def add_workout(db, user_id: str, started_at: datetime, name: str | None = "Workout") -> Workout:
    workout = Workout(user_id=user_id, name=name, started_at=started_at)
    db.add(workout)
    await db.flush()
    return workout


async def add_exercise(db, name: str) -> Exercise:
    exercise = Exercise(name=name)
    db.add(exercise)
    await db.flush()
    return exercise


async def add_entry(db, workout: Workout, exercise: Exercise, order: int, sets=()) -> WorkoutExercise:
    """Attach `exercise` at `order` with (set_number, reps, weight) tuples."""
    entry = WorkoutExercise(workout_id=workout.id, exercise_id=exercise.id, order=order)
    db.add(entry)
    await db.flush()
    for set_number, reps, weight in sets:
        db.add(WorkoutSet(workout_exercise_id=entry.id, set_number=set_number, reps=reps, weight=Decimal(weight)))
    await db.flush()
    return entry
