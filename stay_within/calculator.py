from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from typing import List, Optional, Sequence

from .dates import utc_today
from .trips import Trip

STATUS_OK = "ok"
STATUS_CAUTION = "caution"
STATUS_EXCEEDED = "exceeded"


class NoTripsError(ValueError):
    """Raised when a status is requested for an empty trip list."""


class DateRangeError(ValueError):
    """Raised when month arithmetic leaves the supported calendar years."""


# ---------- Domain ----------

@dataclass(frozen=True)
class Config:
    window_months: int = 12
    absence_limit: int = 180
    evaluation_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.window_months <= 0:
            raise ValueError("window_months must be a positive number of months")
        if self.absence_limit <= 0:
            raise ValueError("absence_limit must be a positive number of days")


@dataclass(frozen=True)
class AnalysisRow:
    trip: Trip
    days_in_window: int
    days_remaining: int


@dataclass(frozen=True)
class StatusResult:
    target_date: date
    is_custom_date: bool
    last_trip_end: date
    days_since_last_trip: int
    window_start: date
    window_end: date
    total_days_outside: int
    days_remaining: int
    status: str


# ---------- Calendar ----------

def add_months(value: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping the day to the month end.

    31 Jan + 1 month is 28 Feb (29 in a leap year), never 3 Mar.

    Raises DateRangeError when the result falls outside the years
    datetime.date supports.
    """
    years, month_index = divmod(value.month - 1 + months, 12)
    year = value.year + years
    month = month_index + 1
    if not MINYEAR <= year <= MAXYEAR:
        raise DateRangeError(f"{value.isoformat()} shifted by {months} months is out of range")

    max_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, max_day))


# ---------- Rolling window ----------

def calculate_days_in_window(trips: Sequence[Trip], window_start: date, window_end: date) -> int:
    """Sum each trip's inclusive overlap with [window_start, window_end].

    Overlapping trips are counted independently; shared days are not merged.
    """
    total = 0
    for trip in trips:
        if trip.end < window_start or trip.start > window_end:
            continue
        overlap_start = max(trip.start, window_start)
        overlap_end = min(trip.end, window_end)
        total += (overlap_end - overlap_start).days + 1
    return total


def analyze_trips(trips: Sequence[Trip], config: Config) -> List[AnalysisRow]:
    """One row per trip, for the window ending on that trip's end date."""
    rows: List[AnalysisRow] = []
    for trip in trips:
        window_start = add_months(trip.end, -config.window_months)
        days_in_window = calculate_days_in_window(trips, window_start, trip.end)
        rows.append(AnalysisRow(trip, days_in_window, config.absence_limit - days_in_window))
    return rows


def warning_threshold(absence_limit: int) -> int:
    """Smaller of 30 days or 15% of the limit, rounded up."""
    return min(30, math.ceil(absence_limit * 0.15))


def classify(days_remaining: int, absence_limit: int) -> str:
    if days_remaining < 0:
        return STATUS_EXCEEDED
    if days_remaining < warning_threshold(absence_limit):
        return STATUS_CAUTION
    return STATUS_OK


def calculate_status(
    trips: Sequence[Trip],
    config: Config,
    today: Optional[date] = None,
) -> StatusResult:
    """Evaluate the rolling window ending on the evaluation date.

    The target date is ``config.evaluation_date`` when set, otherwise
    ``today`` (defaulting to the current UTC date). ``trips`` must be sorted
    by end date; the last one is taken as the most recent trip.
    """
    if not trips:
        raise NoTripsError("no trips to evaluate")

    if config.evaluation_date is not None:
        target = config.evaluation_date
    else:
        target = today if today is not None else utc_today()

    window_start = add_months(target, -config.window_months)
    last_trip = trips[-1]
    total = calculate_days_in_window(trips, window_start, target)
    remaining = config.absence_limit - total

    return StatusResult(
        target_date=target,
        is_custom_date=config.evaluation_date is not None,
        last_trip_end=last_trip.end,
        days_since_last_trip=(target - last_trip.end).days,
        window_start=window_start,
        window_end=target,
        total_days_outside=total,
        days_remaining=remaining,
        status=classify(remaining, config.absence_limit),
    )
