"""Seed the exercise catalog with common lifts. Existing names are left alone."""

import asyncio
import os
import sys

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from app.db.session import async_session_maker, engine
from app.models.exercise import Exercise

DEFAULT_EXERCISES = [
    "Back Squat",
    "Barbell Row",
    "Bench Press",
    "Deadlift",
    "Dumbbell Curl",
    "Lat Pulldown",
    "Leg Press",
    "Overhead Press",
    "Pull Up",
    "Romanian Deadlift",
]


async def main():
    async with async_session_maker() as session:
        result = await session.execute(select(Exercise.name))
        existing = set(result.scalars().all())
        missing = [name for name in DEFAULT_EXERCISES if name not in existing]
        session.add_all(Exercise(name=name) for name in missing)
        await session.commit()
    print(f"Seeded {len(missing)} exercises ({len(existing)} already present).")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
