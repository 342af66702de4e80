"""Exercise model - the shared catalog of exercise names."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import NAME_MAX_LENGTH
from app.db.base import Base


class Exercise(Base):
    """Catalog entry (e.g. Bench Press). Referenced by workouts, never owned by them."""

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    workout_entries: Mapped[list["WorkoutExercise"]] = relationship("WorkoutExercise", back_populates="exercise")
