"""Workout schemas: form/JSON input with duration, and read models for the composite view."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from app.core.constants import NAME_MAX_LENGTH, WEIGHT_PRECISION, WEIGHT_SCALE
from app.services.dates import to_local_naive

DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")


class WorkoutInput(BaseModel):
    """Create/update payload. `duration` is minutes and only used to derive completed_at."""

    name: str = Field(..., max_length=NAME_MAX_LENGTH)
    started_at: datetime
    duration: float | None = Field(None, ge=1, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if len(v) < 1:
            raise PydanticCustomError("name_required", "Workout name is required")
        return v

    @field_validator("started_at", mode="before")
    @classmethod
    def date_only_is_midnight(cls, v):
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min)
        if isinstance(v, str) and DATE_ONLY.fullmatch(v.strip()):
            return f"{v.strip()}T00:00:00"
        return v

    @field_validator("started_at")
    @classmethod
    def local_wall_clock(cls, v: datetime) -> datetime:
        return to_local_naive(v)

    @field_validator("duration", mode="before")
    @classmethod
    def blank_duration(cls, v):
        # HTML forms submit an empty string for an untouched number input
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("duration")
    @classmethod
    def completion_in_range(cls, v: float | None, info: ValidationInfo) -> float | None:
        started_at = info.data.get("started_at")
        if v is None or started_at is None:
            return v
        try:
            started_at + timedelta(minutes=v)
        except OverflowError:
            raise PydanticCustomError("duration_too_long", "Duration is too long")
        return v

    @property
    def completed_at(self) -> datetime | None:
        if self.duration is None:
            return None
        return self.started_at + timedelta(minutes=self.duration)


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    name: str | None = None
    started_at: datetime
    completed_at: datetime | None = None
    created_at: datetime


class WorkoutSetCreate(BaseModel):
    reps: int = Field(..., ge=0)
    weight: Decimal = Field(..., ge=0, max_digits=WEIGHT_PRECISION, decimal_places=WEIGHT_SCALE)


class WorkoutSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    set_number: int
    reps: int
    weight: Decimal


class WorkoutExerciseCreate(BaseModel):
    exercise_id: int


class WorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_id: int
    exercise_id: int
    order: int


class ExerciseWithSets(BaseModel):
    """An exercise inside a workout; `id` is the catalog exercise id."""

    id: int
    workout_exercise_id: int
    name: str
    order: int
    sets: list[WorkoutSetRead] = []


class WorkoutWithExercises(BaseModel):
    id: int
    name: str | None = None
    started_at: datetime
    completed_at: datetime | None = None
    exercises: list[ExerciseWithSets] = []
