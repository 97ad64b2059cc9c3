from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .calculator import STATUS_CAUTION, STATUS_EXCEEDED, AnalysisRow, Config, StatusResult, warning_threshold
from .dates import format_date

RULE_WIDTH = 90


def build_json_document(rows: Sequence[AnalysisRow], status: StatusResult, config: Config) -> Dict[str, Any]:
    """Build the JSON report shared with the other front ends.

    Key names and order are fixed; all dates are dd.mm.yyyy.
    """
    return {
        "config": {
            "windowMonths": config.window_months,
            "absenceLimit": config.absence_limit,
        },
        "trips": [
            {
                "start": format_date(row.trip.start),
                "end": format_date(row.trip.end),
                "days": row.trip.days,
                "daysInWindow": row.days_in_window,
                "daysRemaining": row.days_remaining,
            }
            for row in rows
        ],
        "status": {
            "targetDate": format_date(status.target_date),
            "lastTripEnd": format_date(status.last_trip_end),
            "daysSinceLastTrip": status.days_since_last_trip,
            "windowStart": format_date(status.window_start),
            "windowEnd": format_date(status.window_end),
            "totalDaysOutside": status.total_days_outside,
            "daysRemaining": status.days_remaining,
            "status": status.status,
        },
    }


def render_trip_table(rows: Sequence[AnalysisRow], config: Config) -> List[str]:
    window_col = f"Days in {config.window_months}mo Window"
    lines = [
        "",
        "=" * RULE_WIDTH,
        f"ABSENCE CALCULATOR - Rolling {config.window_months}-Month Window Analysis",
        "=" * RULE_WIDTH,
        "",
        f"Allowed absence: {config.absence_limit} days in any rolling {config.window_months}-month period",
        "",
        "-" * RULE_WIDTH,
        f"{'Trip Start':<12} | {'Trip End':<12} | {'Days':<6} | {window_col:<20} | {'Days Remaining':<12}",
        "-" * RULE_WIDTH,
    ]
    for row in rows:
        line = (
            f"{format_date(row.trip.start):<12} | {format_date(row.trip.end):<12} | "
            f"{row.trip.days:>6} | {row.days_in_window:>20} | {row.days_remaining:>12}"
        )
        if row.trip.notes:
            line += f"  {row.trip.notes}"
        lines.append(line)
        if row.days_remaining < 0:
            lines.append(
                f"{' ' * 12} WARNING: Exceeded {config.absence_limit}-day limit "
                f"by {abs(row.days_remaining)} days!"
            )
    lines.append("-" * RULE_WIDTH)
    lines.append("")
    lines.append(
        f"Note: The {config.window_months}-month window ends on each trip's end date "
        f"and starts {config.window_months} months before."
    )
    lines.append("Days in window include all days from trips that overlap with that window.")
    lines.append("")
    return lines


def render_status(status: StatusResult, config: Config) -> List[str]:
    target = format_date(status.target_date)
    if status.is_custom_date:
        heading = f"ESTIMATED STATUS - As of {target}"
        date_line = f"Estimated date: {target}"
    else:
        heading = "CURRENT STATUS - As of Today"
        date_line = f"Today's date: {target}"

    lines = [
        "=" * RULE_WIDTH,
        heading,
        "=" * RULE_WIDTH,
        "",
        date_line,
        f"Last trip ended: {format_date(status.last_trip_end)}",
        f"Days at home since last trip: {status.days_since_last_trip} days",
        f"Rolling {config.window_months}-month window: "
        f"{format_date(status.window_start)} to {format_date(status.window_end)}",
        "",
        "-" * RULE_WIDTH,
        f"Days spent outside (last {config.window_months} months): {status.total_days_outside} days",
        f"Days remaining (out of {config.absence_limit}): {status.days_remaining} days",
        "-" * RULE_WIDTH,
        "",
    ]
    if status.status == STATUS_EXCEEDED:
        lines.append(
            f"WARNING: You have EXCEEDED the {config.absence_limit}-day limit "
            f"by {abs(status.days_remaining)} days!"
        )
    elif status.status == STATUS_CAUTION:
        lines.append(
            f"CAUTION: You have less than {warning_threshold(config.absence_limit)} days "
            f"remaining in your allowance."
        )
    else:
        lines.append(f"You are within the {config.absence_limit}-day limit.")
    lines.append("")
    return lines


def render_text_report(rows: Sequence[AnalysisRow], status: StatusResult, config: Config) -> str:
    return "\n".join(render_trip_table(rows, config) + render_status(status, config))
