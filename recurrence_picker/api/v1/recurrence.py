"""
Recurrence preview API endpoints
"""
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from recurrence_picker.api.deps import get_engine_options
from recurrence_picker.application.calendar_preview import build_calendar_month, initial_month
from recurrence_picker.application.recurrence_preview import RecurrenceForm, compute_recurring_dates
from recurrence_picker.domain.recurrence import LeapDayPolicy


router = APIRouter(prefix="/api/v1/recurrence", tags=["recurrence"])


# === Response models ===

class RecurringDatesResponse(BaseModel):
    dates: list[str]
    count: int
    truncated: bool


class CalendarDayResponse(BaseModel):
    day: int
    date: str
    is_recurring: bool
    is_start: bool


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    title: str
    weekday_headers: list[str]
    leading_blanks: int
    days: list[CalendarDayResponse]
    previous: tuple[int, int]
    next: tuple[int, int]


# === Endpoints ===

@router.post("/dates", response_model=RecurringDatesResponse)
def recurring_dates(
    form: RecurrenceForm,
    options: tuple[int, LeapDayPolicy] = Depends(get_engine_options),
):
    """Даты повторения для текущего состояния формы"""
    cap, leap_day_policy = options
    result = compute_recurring_dates(form.to_spec(), cap, leap_day_policy)
    dates = result.iso_dates()
    return RecurringDatesResponse(dates=dates, count=len(dates), truncated=result.truncated)


@router.post("/calendar", response_model=CalendarMonthResponse)
def calendar_month(
    form: RecurrenceForm,
    year: int | None = Query(default=None, ge=1, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
    options: tuple[int, LeapDayPolicy] = Depends(get_engine_options),
):
    """Сетка месяца: даты повторения и дата начала"""
    cap, leap_day_policy = options
    spec = form.to_spec()
    start_year, start_month = initial_month(spec.start_date)
    year = year if year is not None else start_year
    month = month if month is not None else start_month

    result = compute_recurring_dates(spec, cap, leap_day_policy)
    start = spec.start_date.isoformat() if spec.start_date else None
    grid = build_calendar_month(year, month, result.iso_dates(), start)

    return CalendarMonthResponse(
        year=grid.year,
        month=grid.month,
        title=grid.title,
        weekday_headers=list(grid.weekday_headers),
        leading_blanks=grid.leading_blanks,
        days=[
            CalendarDayResponse(day=d.day, date=d.date, is_recurring=d.is_recurring, is_start=d.is_start)
            for d in grid.days
        ],
        previous=grid.previous,
        next=grid.next,
    )
