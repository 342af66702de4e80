"""Request dependencies: the signed-in user's id and the selected calendar date."""

from __future__ import annotations

from datetime import date

from fastapi import Depends, HTTPException, Query, Request, status

from app.core.config import Settings, get_settings
from app.services.dates import InvalidDateParam, parse_date_param, today


def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str | None:
    """Opaque user id forwarded by the identity provider, or None when signed out."""
    user_id = request.headers.get(settings.identity_header, "").strip()
    return user_id or None


def require_user_id(user_id: str | None = Depends(get_current_user_id)) -> str:
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user_id


def get_selected_date(date_param: str | None = Query(None, alias="date")) -> date:
    """`?date=yyyy-MM-dd`; today when absent, 400 when malformed."""
    try:
        selected = parse_date_param(date_param)
    except InvalidDateParam as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return selected or today()


def get_optional_date(date_param: str | None = Query(None, alias="date")) -> date | None:
    try:
        return parse_date_param(date_param)
    except InvalidDateParam as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
