"""
Validation utilities for the recurrence form input.

Form values arrive as loosely typed JSON; these helpers coerce them and never raise.
"""
from datetime import date
from typing import Any, Iterable

from recurrence_picker.domain.recurrence import Weekday


def parse_interval(value: Any) -> int:
    """
    Нормализовать интервал повторения

    Args:
        value: Число или строка из поля "Every N"

    Returns:
        Целое >= 1; дробные, нечисловые и значения < 1 дают 1

    Example:
        >>> parse_interval("3")
        3
        >>> parse_interval(4.0)
        4
        >>> parse_interval("2.5")
        1
        >>> parse_interval(0)
        1
    """
    if isinstance(value, bool):
        return 1
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 1
    if isinstance(value, float):
        if not value.is_integer():
            return 1
        value = int(value)
    if not isinstance(value, int) or value < 1:
        return 1
    return value


def parse_iso_date(value: Any) -> date | None:
    """
    Parse a YYYY-MM-DD form value

    Returns:
        date, or None for empty/invalid input

    Example:
        >>> parse_iso_date("2024-01-09")
        datetime.date(2024, 1, 9)
        >>> parse_iso_date("")
        None
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def parse_weekdays(values: Iterable[Any] | None) -> frozenset[Weekday]:
    """Weekday names -> set of Weekday. Duplicates and unknown names are ignored."""
    out: set[Weekday] = set()
    for value in values or ():
        if isinstance(value, str):
            wd = Weekday.from_name(value)
            if wd is not None:
                out.add(wd)
    return frozenset(out)
