"""Create/update submissions: auth check, validation, write. Results are tagged outcomes, never exceptions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.workout import Workout
from app.schemas.workout import WorkoutInput
from app.services import workouts as repo

logger = logging.getLogger(__name__)


@dataclass
class Ok:
    workout: Workout


@dataclass
class Unauthorized:
    message: str = "Unauthorized"


@dataclass
class ValidationFailed:
    field_errors: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class NotFound:
    message: str = "Workout not found"


CreateOutcome = Union[Ok, Unauthorized, ValidationFailed]
UpdateOutcome = Union[Ok, Unauthorized, ValidationFailed, NotFound]


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors to {field: [messages]}; model-level errors go under "_"."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        key = str(err["loc"][0]) if err["loc"] else "_"
        errors.setdefault(key, []).append(err["msg"])
    return errors


def validate_workout_input(raw: Mapping[str, Any]) -> WorkoutInput | ValidationFailed:
    try:
        return WorkoutInput.model_validate(dict(raw))
    except ValidationError as e:
        return ValidationFailed(field_errors(e))


def _to_data(payload: WorkoutInput) -> repo.WorkoutData:
    return repo.WorkoutData(
        name=payload.name,
        started_at=payload.started_at,
        completed_at=payload.completed_at,
    )


async def create_workout_action(
    db: AsyncSession, user_id: str | None, raw: Mapping[str, Any]
) -> CreateOutcome:
    if not user_id:
        return Unauthorized()
    payload = validate_workout_input(raw)
    if isinstance(payload, ValidationFailed):
        logger.debug("Create rejected: %s", payload.field_errors)
        return payload
    return Ok(await repo.create_workout(db, user_id, _to_data(payload)))


async def update_workout_action(
    db: AsyncSession, user_id: str | None, workout_id: int, raw: Mapping[str, Any]
) -> UpdateOutcome:
    if not user_id:
        return Unauthorized()
    payload = validate_workout_input(raw)
    if isinstance(payload, ValidationFailed):
        logger.debug("Update of workout %s rejected: %s", workout_id, payload.field_errors)
        return payload
    workout = await repo.update_workout(db, user_id, workout_id, _to_data(payload))
    if workout is None:
        return NotFound()
    return Ok(workout)
