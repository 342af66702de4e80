"""Exercise catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.exercise import ExerciseCreate, ExerciseRead
from app.services import exercises as repo

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(db: AsyncSession = Depends(get_db)):
    """List the catalog ordered by name."""
    return await repo.list_exercises(db)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add a catalog entry. Names are unique."""
    try:
        return await repo.create_exercise(db, payload.name)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Exercise already exists")


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: int,
    db: AsyncSession = Depends(get_db),
):
    exercise = await repo.get_exercise(db, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
