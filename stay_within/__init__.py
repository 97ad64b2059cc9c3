"""Rolling-window absence calculator.

Checks whether the days spent outside a home country within any trailing
window of months stay under a limit (UK ILR 180/12, Schengen 90/6, US 182/12).
"""

from .calculator import (
    STATUS_CAUTION,
    STATUS_EXCEEDED,
    STATUS_OK,
    AnalysisRow,
    Config,
    DateRangeError,
    NoTripsError,
    StatusResult,
    add_months,
    analyze_trips,
    calculate_days_in_window,
    calculate_status,
    warning_threshold,
)
from .dates import format_date, is_header_row, parse_date, utc_today
from .trips import Trip, parse_trips_from_text

__version__ = "1.0.0"

__all__ = [
    "STATUS_CAUTION",
    "STATUS_EXCEEDED",
    "STATUS_OK",
    "AnalysisRow",
    "Config",
    "DateRangeError",
    "NoTripsError",
    "StatusResult",
    "Trip",
    "add_months",
    "analyze_trips",
    "calculate_days_in_window",
    "calculate_status",
    "format_date",
    "is_header_row",
    "parse_date",
    "parse_trips_from_text",
    "utc_today",
    "warning_threshold",
]
