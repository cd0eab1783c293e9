"""Calendar month preview - one month grid with recurring dates and the start date marked."""
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from recurrence_picker.domain.recurrence import Weekday, last_day_of_month


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_HEADERS = tuple(wd.short for wd in Weekday)  # Sun..Sat


@dataclass(frozen=True)
class CalendarDay:
    day: int
    date: str  # YYYY-MM-DD
    is_recurring: bool
    is_start: bool


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    title: str
    weekday_headers: tuple[str, ...]
    leading_blanks: int
    days: tuple[CalendarDay, ...]
    previous: tuple[int, int]
    next: tuple[int, int]


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def initial_month(start_date: date | None, today: date | None = None) -> tuple[int, int]:
    """Month shown first: the start date's month, otherwise today's."""
    anchor = start_date or today or date.today()
    return anchor.year, anchor.month


def build_calendar_month(
    year: int,
    month: int,
    recurring_dates: Iterable[str],
    start_date: str | None = None,
) -> CalendarMonth:
    """
    Build the month grid.

    A day is recurring when its YYYY-MM-DD string is in recurring_dates.
    The start date is flagged on its own, whether or not it recurs.
    """
    recurring = set(recurring_dates)
    first = date(year, month, 1)
    days = []
    for day in range(1, last_day_of_month(year, month) + 1):
        key = date(year, month, day).isoformat()
        days.append(CalendarDay(
            day=day,
            date=key,
            is_recurring=key in recurring,
            is_start=key == start_date,
        ))

    return CalendarMonth(
        year=year,
        month=month,
        title=f"{MONTH_NAMES[month - 1]} {year}",
        weekday_headers=WEEKDAY_HEADERS,
        leading_blanks=int(Weekday.of(first)),
        days=tuple(days),
        previous=previous_month(year, month),
        next=next_month(year, month),
    )
