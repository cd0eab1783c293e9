"""
Pytest fixtures for testing
"""
from datetime import date

import pytest

from recurrence_picker.application.recurrence_preview import compute_recurring_dates
from recurrence_picker.domain.recurrence import RecurrenceSpec, RecurrenceType


@pytest.fixture(autouse=True)
def clear_recurrence_cache():
    """Memoized results must not leak log records or settings between tests"""
    compute_recurring_dates.cache_clear()
    yield
    compute_recurring_dates.cache_clear()


@pytest.fixture
def make_spec():
    """Factory for RecurrenceSpec with daily/2024-01-01 defaults"""
    def _make(**overrides) -> RecurrenceSpec:
        fields = {
            "type": RecurrenceType.DAILY,
            "interval": 1,
            "start_date": date(2024, 1, 1),
        }
        fields.update(overrides)
        return RecurrenceSpec(**fields)
    return _make
