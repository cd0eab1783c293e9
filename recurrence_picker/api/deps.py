"""
FastAPI dependencies (settings)
"""
from fastapi import Depends

from recurrence_picker.config import Settings, get_settings as _get_settings
from recurrence_picker.domain.recurrence import LeapDayPolicy


# Re-export get_settings для удобства (в тестах подменяется через app.dependency_overrides)
get_settings = _get_settings


def get_engine_options(settings: Settings = Depends(get_settings)) -> tuple[int, LeapDayPolicy]:
    """
    Safety cap and leap-day policy for the recurrence engine

    Returns:
        (cap, leap_day_policy)
    """
    return settings.get_date_cap(), settings.RECURRENCE_LEAP_DAY_POLICY
