"""
Deterministic recurring date generator.

Uses date only (no timezone). Turns a RecurrenceSpec into an ascending,
duplicate-free list of dates.

Types:
- DAILY: every N days
- WEEKLY: selected weekdays every N weeks (or the start weekday when none selected)
- MONTHLY: Nth (or last) weekday of the month every N months
- YEARLY: anniversary of start_date every N years
"""
import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum, IntEnum
from typing import Callable, FrozenSet


logger = logging.getLogger(__name__)

DEFAULT_DATE_CAP = 731  # two years of daily dates plus one


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def title(self) -> str:
        return self.name.capitalize()

    @property
    def short(self) -> str:
        return self.title[:3]

    @classmethod
    def of(cls, d: date) -> "Weekday":
        # date.weekday() is Monday=0
        return cls((d.weekday() + 1) % 7)

    @classmethod
    def from_name(cls, name: str) -> "Weekday | None":
        """'Monday', 'monday' or 'Mon' -> Weekday.MONDAY; unknown -> None."""
        key = name.strip().lower()
        for wd in cls:
            if key == wd.name.lower() or key == wd.short.lower():
                return wd
        return None


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Ordinal(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    FOURTH = "fourth"
    LAST = "last"


ORDINAL_OCCURRENCE = {
    Ordinal.FIRST: 1,
    Ordinal.SECOND: 2,
    Ordinal.THIRD: 3,
    Ordinal.FOURTH: 4,
}


class LeapDayPolicy(str, Enum):
    """
    How a Feb 29 yearly anniversary resolves in a non-leap year.

    ROLLOVER advances the cursor itself, so once it lands on Mar 1 it stays there.
    The other policies recompute every year from start_date and return to Feb 29
    in leap years.
    """
    ROLLOVER = "rollover"  # Mar 1, then Mar 1 for good
    REANCHOR = "reanchor"  # Mar 1 in non-leap years, Feb 29 in leap years
    CLAMP = "clamp"  # Feb 28
    SKIP = "skip"  # no date that year


@dataclass(frozen=True)
class MonthlyPattern:
    ordinal: Ordinal = Ordinal.FIRST
    weekday: Weekday | None = Weekday.MONDAY  # None: unknown weekday name, never matches


@dataclass(frozen=True)
class RecurrenceSpec:
    type: RecurrenceType
    interval: int = 1
    days_of_week: FrozenSet[Weekday] = field(default_factory=frozenset)  # WEEKLY only
    monthly_pattern: MonthlyPattern = field(default_factory=MonthlyPattern)  # MONTHLY only
    start_date: date | None = None
    end_date_enabled: bool = False
    end_date: date | None = None


@dataclass(frozen=True)
class NormalizedSpec:
    type: RecurrenceType
    interval: int
    days_of_week: FrozenSet[Weekday]
    monthly_pattern: MonthlyPattern
    start_date: date
    effective_end: date | None
    leap_day_policy: LeapDayPolicy = LeapDayPolicy.ROLLOVER


def clamp_interval(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return 1
    return value


def normalize(
    spec: RecurrenceSpec,
    leap_day_policy: LeapDayPolicy = LeapDayPolicy.ROLLOVER,
) -> NormalizedSpec | None:
    """Return the spec ready for generation, or None when it produces no dates."""
    if spec.start_date is None:
        return None

    effective_end = spec.end_date if spec.end_date_enabled else None
    if (
        spec.type == RecurrenceType.MONTHLY
        and spec.monthly_pattern.weekday is None
        and effective_end is None
    ):
        return None

    return NormalizedSpec(
        type=spec.type,
        interval=clamp_interval(spec.interval),
        days_of_week=frozenset(spec.days_of_week),
        monthly_pattern=spec.monthly_pattern,
        start_date=spec.start_date,
        effective_end=effective_end,
        leap_day_policy=leap_day_policy,
    )


# --- Calendar helpers ---

def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_of_month_ahead(d: date, n: int) -> date:
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    return date(year, month, 1)


def anniversary(anchor: date, year: int, policy: LeapDayPolicy) -> date | None:
    """anchor's month/day in the given year, resolved by policy when the day is missing."""
    last = last_day_of_month(year, anchor.month)
    if anchor.day <= last:
        return date(year, anchor.month, anchor.day)
    if policy == LeapDayPolicy.CLAMP:
        return date(year, anchor.month, last)
    if policy == LeapDayPolicy.SKIP:
        return None
    return date(year, anchor.month, last) + timedelta(days=anchor.day - last)


def resolve_ordinal(year: int, month: int, weekday: Weekday | None, ordinal: Ordinal) -> date | None:
    """Date of the ordinal weekday in the month (e.g. second Tuesday), or None."""
    if weekday is None:
        return None
    last = last_day_of_month(year, month)
    occurrence = 0
    for day in range(1, last + 1):
        d = date(year, month, day)
        if Weekday.of(d) != weekday:
            continue
        occurrence += 1
        if ordinal == Ordinal.LAST:
            if day + 7 > last:
                return d
        elif occurrence == ORDINAL_OCCURRENCE[ordinal]:
            return d
    return None


# --- Per-type strategies: emit candidates for the cursor, return the next cursor ---

AddCandidate = Callable[[date], None]


def _daily(cursor: date, spec: NormalizedSpec, add: AddCandidate) -> date:
    add(cursor)
    return cursor + timedelta(days=spec.interval)


def _weekly(cursor: date, spec: NormalizedSpec, add: AddCandidate) -> date:
    if spec.days_of_week:
        for i in range(7):
            candidate = cursor + timedelta(days=i)
            if Weekday.of(candidate) in spec.days_of_week:
                add(candidate)
    else:
        add(cursor)
    return cursor + timedelta(days=7 * spec.interval)


def _monthly(cursor: date, spec: NormalizedSpec, add: AddCandidate) -> date:
    pattern = spec.monthly_pattern
    target = resolve_ordinal(cursor.year, cursor.month, pattern.weekday, pattern.ordinal)
    if target is not None:
        add(target)
    return first_of_month_ahead(cursor, spec.interval)


def _yearly(cursor: date, spec: NormalizedSpec, add: AddCandidate) -> date:
    if spec.leap_day_policy == LeapDayPolicy.ROLLOVER:
        add(cursor)
        return anniversary(cursor, cursor.year + spec.interval, LeapDayPolicy.ROLLOVER)

    occurrence = anniversary(spec.start_date, cursor.year, spec.leap_day_policy)
    if occurrence is not None:
        add(occurrence)
    # clamped cursor is never later than the occurrence any policy emits for that year
    return anniversary(spec.start_date, cursor.year + spec.interval, LeapDayPolicy.CLAMP)


STRATEGIES: dict[RecurrenceType, Callable[[date, NormalizedSpec, AddCandidate], date]] = {
    RecurrenceType.DAILY: _daily,
    RecurrenceType.WEEKLY: _weekly,
    RecurrenceType.MONTHLY: _monthly,
    RecurrenceType.YEARLY: _yearly,
}


class SequenceAssembler:
    """Runs one strategy to completion and collects its dates."""

    def __init__(self, spec: NormalizedSpec, cap: int = DEFAULT_DATE_CAP):
        self.spec = spec
        self.cap = max(cap, 1)
        self.truncated = False
        self._dates: dict[str, date] = {}

    def add_candidate(self, d: date) -> None:
        end = self.spec.effective_end
        if end is not None and d > end:
            return
        key = d.isoformat()
        if key in self._dates:
            return
        if len(self._dates) >= self.cap:
            self._mark_truncated()
            return
        self._dates[key] = d

    def _mark_truncated(self) -> None:
        if self.truncated:
            return
        self.truncated = True
        logger.warning(
            "Recurrence truncated at %d dates (type=%s, start=%s)",
            self.cap, self.spec.type.value, self.spec.start_date,
        )

    def _in_range(self, cursor: date) -> bool:
        end = self.spec.effective_end
        return end is None or cursor <= end

    def run(self) -> list[date]:
        strategy = STRATEGIES[self.spec.type]
        cursor = self.spec.start_date
        while self._in_range(cursor):
            if len(self._dates) >= self.cap:
                self._mark_truncated()
                break
            try:
                cursor = strategy(cursor, self.spec, self.add_candidate)
            except (OverflowError, ValueError):
                # cursor ran past date.max
                logger.debug("Recurrence reached the end of the calendar at %s", cursor)
                break
        return sorted(self._dates.values())


def generate_recurring_dates(
    spec: RecurrenceSpec,
    cap: int = DEFAULT_DATE_CAP,
    leap_day_policy: LeapDayPolicy = LeapDayPolicy.ROLLOVER,
) -> list[date]:
    """Generate the recurring dates of spec, ascending and unique, at most cap of them."""
    normalized = normalize(spec, leap_day_policy)
    if normalized is None:
        return []
    return SequenceAssembler(normalized, cap=cap).run()
