"""Server-rendered pages: date-scoped dashboard and the new/edit workout forms."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.constants import DEFAULT_WORKOUT_NAME
from app.core.deps import get_current_user_id, get_optional_date, get_selected_date
from app.db.session import get_db
from app.services import dates
from app.services import workouts as repo
from app.services.calendar import WEEKDAY_LABELS, build_month
from app.services.workout_actions import (
    NotFound,
    Unauthorized,
    ValidationFailed,
    create_workout_action,
    update_workout_action,
)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(include_in_schema=False)

FORM_FIELDS = ("name", "started_at", "duration")
DATETIME_INPUT_FORMAT = "%Y-%m-%dT%H:%M"
NEW_WORKOUT_PATH = "/dashboard/workout/new"


def format_set(reps: int, weight: Decimal) -> str:
    """Compact "reps×weight" rendering, e.g. 8×60.00kg."""
    return f"{reps}×{weight}kg"


def duration_minutes(workout) -> int | None:
    if workout.completed_at is None:
        return None
    return int((workout.completed_at - workout.started_at).total_seconds() // 60)


templates.env.filters["format_set"] = format_set
templates.env.globals["DEFAULT_WORKOUT_NAME"] = DEFAULT_WORKOUT_NAME
templates.env.globals["WEEKDAY_LABELS"] = WEEKDAY_LABELS


def _sign_in_redirect(settings: Settings) -> RedirectResponse:
    return RedirectResponse(settings.sign_in_url, status_code=303)


def _dashboard_redirect(started_at: datetime) -> RedirectResponse:
    return RedirectResponse(f"/dashboard?date={dates.format_date_param(started_at)}", status_code=303)


def _not_found(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "not_found.html", {}, status_code=404)


def _parse_workout_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


async def _form_values(request: Request) -> dict[str, Any]:
    form = await request.form()
    return {k: form.get(k) for k in FORM_FIELDS if form.get(k) is not None}


def _render_form(
    request: Request,
    *,
    title: str,
    action: str,
    values: dict[str, Any],
    errors: dict[str, list[str]] | None = None,
    exercises: list | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "workout_form.html",
        {
            "title": title,
            "action": action,
            "submit_label": "Update Workout" if action != NEW_WORKOUT_PATH else "Create Workout",
            "values": values,
            "errors": errors or {},
            "exercises": exercises or [],
        },
        status_code=status_code,
    )


@router.get("/")
async def home():
    return RedirectResponse("/dashboard", status_code=303)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    date_param: str | None = Query(None, alias="date"),
    user_id: str | None = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    if user_id is None:
        return _sign_in_redirect(settings)
    selected = get_selected_date(date_param)
    workouts = await repo.get_workouts_by_user_and_date(db, user_id, selected)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "selected_date": selected,
            "selected_param": dates.format_date_param(selected),
            "month": build_month(selected, today=dates.today()),
            "workouts": workouts,
        },
    )


@router.get(NEW_WORKOUT_PATH, response_class=HTMLResponse)
async def new_workout_page(
    request: Request,
    date_param: str | None = Query(None, alias="date"),
    user_id: str | None = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
):
    if user_id is None:
        return _sign_in_redirect(settings)
    initial = get_optional_date(date_param)
    now = dates.now()
    started_at = datetime.combine(initial, now.time()) if initial else now
    return _render_form(
        request,
        title="New Workout",
        action=NEW_WORKOUT_PATH,
        values={"name": "", "started_at": started_at.strftime(DATETIME_INPUT_FORMAT), "duration": ""},
    )


@router.post(NEW_WORKOUT_PATH, response_class=HTMLResponse)
async def submit_new_workout(
    request: Request,
    user_id: str | None = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    values = await _form_values(request)
    outcome = await create_workout_action(db, user_id, values)
    if isinstance(outcome, Unauthorized):
        return _sign_in_redirect(settings)
    if isinstance(outcome, ValidationFailed):
        return _render_form(
            request,
            title="New Workout",
            action=NEW_WORKOUT_PATH,
            values=values,
            errors=outcome.field_errors,
            status_code=422,
        )
    return _dashboard_redirect(outcome.workout.started_at)


@router.get("/dashboard/workout/{workout_id}", response_class=HTMLResponse)
async def edit_workout_page(
    request: Request,
    workout_id: str,
    user_id: str | None = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    if user_id is None:
        return _sign_in_redirect(settings)
    parsed_id = _parse_workout_id(workout_id)
    if parsed_id is None:
        return _not_found(request)
    workout = await repo.get_workout_with_exercises(db, user_id, parsed_id)
    if workout is None:
        return _not_found(request)
    minutes = duration_minutes(workout)
    return _render_form(
        request,
        title="Edit Workout",
        action=f"/dashboard/workout/{parsed_id}",
        values={
            "name": workout.name or "",
            "started_at": workout.started_at.strftime(DATETIME_INPUT_FORMAT),
            "duration": "" if minutes is None else minutes,
        },
        exercises=workout.exercises,
    )


@router.post("/dashboard/workout/{workout_id}", response_class=HTMLResponse)
async def submit_edit_workout(
    request: Request,
    workout_id: str,
    user_id: str | None = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    parsed_id = _parse_workout_id(workout_id)
    if parsed_id is None:
        return _not_found(request)
    values = await _form_values(request)
    outcome = await update_workout_action(db, user_id, parsed_id, values)
    if isinstance(outcome, Unauthorized):
        return _sign_in_redirect(settings)
    if isinstance(outcome, NotFound):
        return _not_found(request)
    if isinstance(outcome, ValidationFailed):
        return _render_form(
            request,
            title="Edit Workout",
            action=f"/dashboard/workout/{parsed_id}",
            values=values,
            errors=outcome.field_errors,
            status_code=422,
        )
    return _dashboard_redirect(outcome.workout.started_at)
