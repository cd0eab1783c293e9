"""
Recurrence preview use case - form input in, recurring dates out.

The editing form posts its state on every change; each post is one fresh
computation. Results are memoized on the full (spec, cap, policy) key.
"""
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recurrence_picker.domain.recurrence import (
    DEFAULT_DATE_CAP,
    LeapDayPolicy,
    MonthlyPattern,
    Ordinal,
    RecurrenceSpec,
    RecurrenceType,
    SequenceAssembler,
    Weekday,
    normalize,
)
from recurrence_picker.utils.validation import parse_interval, parse_iso_date, parse_weekdays


class MonthlyPatternForm(BaseModel):
    week: Ordinal = Ordinal.FIRST
    day: str = "Monday"

    @field_validator("week", mode="before")
    @classmethod
    def lowercase_week(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class RecurrenceForm(BaseModel):
    """Serialized RecurrenceSpec as posted by the editing form (camelCase or snake_case)."""
    model_config = ConfigDict(populate_by_name=True)

    recurrence_type: RecurrenceType = Field(alias="recurrenceType")
    interval: int = 1
    days_of_week: list[str] = Field(default_factory=list, alias="daysOfWeek")
    monthly_pattern: MonthlyPatternForm = Field(default_factory=MonthlyPatternForm, alias="monthlyPattern")
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    is_end_date_enabled: bool = Field(default=False, alias="isEndDateEnabled")

    @field_validator("recurrence_type", mode="before")
    @classmethod
    def lowercase_type(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("interval", mode="before")
    @classmethod
    def coerce_interval(cls, v: Any) -> int:
        """Некорректный интервал трактуется как 1"""
        return parse_interval(v)

    @field_validator("days_of_week", mode="before")
    @classmethod
    def coerce_days(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple, set)):
            return [day for day in v if isinstance(day, str)]
        return v

    def to_spec(self) -> RecurrenceSpec:
        return RecurrenceSpec(
            type=self.recurrence_type,
            interval=self.interval,
            days_of_week=parse_weekdays(self.days_of_week),
            monthly_pattern=MonthlyPattern(
                ordinal=self.monthly_pattern.week,
                weekday=Weekday.from_name(self.monthly_pattern.day),
            ),
            start_date=parse_iso_date(self.start_date),
            end_date_enabled=self.is_end_date_enabled,
            end_date=parse_iso_date(self.end_date),
        )


@dataclass(frozen=True)
class RecurringDates:
    dates: tuple[date, ...]
    truncated: bool = False

    def iso_dates(self) -> list[str]:
        return [d.isoformat() for d in self.dates]


@lru_cache(maxsize=256)
def compute_recurring_dates(
    spec: RecurrenceSpec,
    cap: int = DEFAULT_DATE_CAP,
    leap_day_policy: LeapDayPolicy = LeapDayPolicy.ROLLOVER,
) -> RecurringDates:
    """Generate dates for spec; truncated is set when the safety cap cut the sequence."""
    normalized = normalize(spec, leap_day_policy)
    if normalized is None:
        return RecurringDates(dates=())
    assembler = SequenceAssembler(normalized, cap=cap)
    dates = assembler.run()
    return RecurringDates(dates=tuple(dates), truncated=assembler.truncated)


def preview_recurring_dates(
    form: RecurrenceForm | dict,
    cap: int = DEFAULT_DATE_CAP,
    leap_day_policy: LeapDayPolicy = LeapDayPolicy.ROLLOVER,
) -> list[str]:
    """Form state -> ascending YYYY-MM-DD strings, as the calendar preview consumes them."""
    if isinstance(form, dict):
        form = RecurrenceForm.model_validate(form)
    return compute_recurring_dates(form.to_spec(), cap, leap_day_policy).iso_dates()
