"""
Tests for the recurrence preview use case (form input -> date strings)
"""
from datetime import date

import pytest
from pydantic import ValidationError

from recurrence_picker.application.recurrence_preview import (
    RecurrenceForm,
    compute_recurring_dates,
    preview_recurring_dates,
)
from recurrence_picker.domain.recurrence import LeapDayPolicy, Ordinal, RecurrenceType, Weekday


def test_form_camel_case_to_spec():
    form = RecurrenceForm.model_validate({
        "recurrenceType": "weekly",
        "interval": 2,
        "daysOfWeek": ["Monday", "Wednesday", "Monday"],
        "monthlyPattern": {"week": "last", "day": "Friday"},
        "startDate": "2024-01-01",
        "endDate": "2024-02-01",
        "isEndDateEnabled": True,
    })
    spec = form.to_spec()
    assert spec.type == RecurrenceType.WEEKLY
    assert spec.interval == 2
    assert spec.days_of_week == frozenset({Weekday.MONDAY, Weekday.WEDNESDAY})
    assert spec.monthly_pattern.ordinal == Ordinal.LAST
    assert spec.monthly_pattern.weekday == Weekday.FRIDAY
    assert spec.start_date == date(2024, 1, 1)
    assert spec.end_date == date(2024, 2, 1)
    assert spec.end_date_enabled is True


def test_form_snake_case_accepted():
    form = RecurrenceForm(recurrence_type="daily", start_date="2024-01-01")
    assert form.to_spec().start_date == date(2024, 1, 1)


def test_form_defaults():
    spec = RecurrenceForm.model_validate({"recurrenceType": "monthly"}).to_spec()
    assert spec.interval == 1
    assert spec.days_of_week == frozenset()
    assert spec.monthly_pattern.ordinal == Ordinal.FIRST
    assert spec.monthly_pattern.weekday == Weekday.MONDAY
    assert spec.start_date is None
    assert spec.end_date_enabled is False


@pytest.mark.parametrize("raw, expected", [
    ("3", 3), (0, 1), (-2, 1), ("abc", 1), (None, 1), (2.9, 1), (2.5, 1), ("2.5", 1), (4.0, 4), ("4.0", 4), (float("nan"), 1), ("", 1),
])
def test_form_interval_coercion(raw, expected):
    form = RecurrenceForm.model_validate({"recurrenceType": "daily", "interval": raw})
    assert form.interval == expected


def test_form_type_case_insensitive():
    form = RecurrenceForm.model_validate({"recurrenceType": "Yearly"})
    assert form.recurrence_type == RecurrenceType.YEARLY


def test_form_rejects_unknown_type():
    with pytest.raises(ValidationError):
        RecurrenceForm.model_validate({"recurrenceType": "hourly"})


def test_form_rejects_unknown_ordinal():
    with pytest.raises(ValidationError):
        RecurrenceForm.model_validate({"recurrenceType": "monthly", "monthlyPattern": {"week": "fifth"}})


def test_form_unknown_weekdays_ignored():
    spec = RecurrenceForm.model_validate({
        "recurrenceType": "weekly", "daysOfWeek": ["Funday", "tue", None],
    }).to_spec()
    assert spec.days_of_week == frozenset({Weekday.TUESDAY})


def test_form_invalid_dates_treated_as_absent():
    spec = RecurrenceForm.model_validate({
        "recurrenceType": "daily", "startDate": "2024-13-45", "endDate": "", "isEndDateEnabled": True,
    }).to_spec()
    assert spec.start_date is None
    assert spec.end_date is None


def test_preview_daily_spacing():
    dates = preview_recurring_dates({
        "recurrenceType": "daily",
        "interval": 3,
        "startDate": "2024-01-01",
        "endDate": "2024-01-10",
        "isEndDateEnabled": True,
    })
    assert dates == ["2024-01-01", "2024-01-04", "2024-01-07", "2024-01-10"]


def test_preview_end_date_ignored_when_disabled():
    dates = preview_recurring_dates({
        "recurrenceType": "yearly",
        "startDate": "2024-05-01",
        "endDate": "2024-06-01",
        "isEndDateEnabled": False,
    }, cap=3)
    assert dates == ["2024-05-01", "2025-05-01", "2026-05-01"]


def test_preview_empty_start_ignores_everything_else():
    dates = preview_recurring_dates({
        "recurrenceType": "weekly",
        "interval": 4,
        "daysOfWeek": ["Monday"],
        "startDate": "",
        "endDate": "2030-01-01",
        "isEndDateEnabled": True,
    })
    assert dates == []


def test_preview_monthly_unknown_day_bounded():
    dates = preview_recurring_dates({
        "recurrenceType": "monthly",
        "monthlyPattern": {"week": "first", "day": "Someday"},
        "startDate": "2024-01-01",
        "endDate": "2024-06-30",
        "isEndDateEnabled": True,
    })
    assert dates == []


def test_preview_leap_day_policy_passed_through():
    form = {
        "recurrenceType": "yearly",
        "startDate": "2024-02-29",
        "endDate": "2025-12-31",
        "isEndDateEnabled": True,
    }
    assert preview_recurring_dates(form) == ["2024-02-29", "2025-03-01"]
    assert preview_recurring_dates(form, leap_day_policy=LeapDayPolicy.CLAMP) == ["2024-02-29", "2025-02-28"]
    assert preview_recurring_dates(form, leap_day_policy=LeapDayPolicy.SKIP) == ["2024-02-29"]


def test_compute_marks_truncation():
    spec = RecurrenceForm.model_validate({"recurrenceType": "daily", "startDate": "2024-01-01"}).to_spec()
    result = compute_recurring_dates(spec, 4)
    assert result.truncated is True
    assert result.iso_dates() == ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"]


def test_compute_is_memoized():
    spec = RecurrenceForm.model_validate({"recurrenceType": "daily", "startDate": "2024-01-01"}).to_spec()
    first = compute_recurring_dates(spec, 10)
    second = compute_recurring_dates(spec, 10)
    assert first is second
    assert compute_recurring_dates.cache_info().hits == 1
