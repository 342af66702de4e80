"""Month grid for the dashboard date-picker. Weeks start on Monday."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from app.services.dates import MAX_DATE

_MONTH_CALENDAR = calendar.Calendar(firstweekday=calendar.MONDAY)

WEEKDAY_LABELS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]


@dataclass(frozen=True)
class CalendarDay:
    day: date
    in_month: bool
    is_selected: bool
    is_today: bool


@dataclass(frozen=True)
class CalendarMonth:
    title: str
    weeks: list[list[CalendarDay]]
    prev_month: date
    next_month: date


def shift_month(day: date, months: int) -> date:
    """Same day-of-month `months` away, clamped to the target month's length and to [date.min, MAX_DATE]."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    if year < date.min.year:
        return date.min
    if year > MAX_DATE.year:
        return MAX_DATE
    return min(date(year, month, min(day.day, calendar.monthrange(year, month)[1])), MAX_DATE)


def build_month(selected: date, today: date | None = None) -> CalendarMonth:
    today = today or date.today()
    weeks = [
        [
            CalendarDay(
                day=d,
                in_month=d.month == selected.month,
                is_selected=d == selected,
                is_today=d == today,
            )
            for d in week
        ]
        for week in _MONTH_CALENDAR.monthdatescalendar(selected.year, selected.month)
    ]
    return CalendarMonth(
        title=f"{calendar.month_name[selected.month]} {selected.year}",
        weeks=weeks,
        prev_month=shift_month(selected, -1),
        next_month=shift_month(selected, 1),
    )
