"""Exercise catalog queries."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise


async def list_exercises(db: AsyncSession) -> list[Exercise]:
    result = await db.execute(select(Exercise).order_by(Exercise.name))
    return list(result.scalars().all())


async def get_exercise(db: AsyncSession, exercise_id: int) -> Exercise | None:
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    return result.scalar_one_or_none()


async def create_exercise(db: AsyncSession, name: str) -> Exercise:
    """Insert a catalog entry. A duplicate name raises IntegrityError on flush."""
    exercise = Exercise(name=name)
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise
