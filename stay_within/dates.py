from __future__ import annotations

import calendar
import re
from datetime import MINYEAR, date, datetime, timezone
from re import Match, Pattern
from typing import Callable, Dict, List, Optional, Sequence, Tuple


YMD = Tuple[int, int, int]

MONTHS_SHORT: Dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

MONTHS_LONG: Dict[str, int] = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
}

HEADER_KEYWORDS = ("start", "end", "begin", "from", "to", "departure", "arrival", "date")


# ---------- Formats ----------

def _day_first(m: Match[str]) -> YMD:
    return int(m.group(3)), int(m.group(2)), int(m.group(1))


def _year_first(m: Match[str]) -> YMD:
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def _month_first(m: Match[str]) -> YMD:
    return int(m.group(3)), int(m.group(1)), int(m.group(2))


def _named_month(names: Dict[str, int]) -> Callable[[Match[str]], Optional[YMD]]:
    def extract(m: Match[str]) -> Optional[YMD]:
        month = names.get(m.group(2).lower())
        if month is None:
            return None
        return int(m.group(3)), month, int(m.group(1))

    return extract


def _pattern(regex: str) -> Pattern[str]:
    return re.compile(regex, re.ASCII)


# Priority order matters: day-first slash/dash forms are tried before the US
# month-first forms, so "05/12/2023" is 5 December.
DATE_FORMATS: List[Tuple[str, Pattern[str], Callable[[Match[str]], Optional[YMD]]]] = [
    ("dd.mm.yyyy", _pattern(r"(\d{2})\.(\d{2})\.(\d{4})"), _day_first),
    ("dd/mm/yyyy", _pattern(r"(\d{2})/(\d{2})/(\d{4})"), _day_first),
    ("dd-mm-yyyy", _pattern(r"(\d{2})-(\d{2})-(\d{4})"), _day_first),
    ("yyyy-mm-dd", _pattern(r"(\d{4})-(\d{2})-(\d{2})"), _year_first),
    ("yyyy/mm/dd", _pattern(r"(\d{4})/(\d{2})/(\d{2})"), _year_first),
    ("yyyy.mm.dd", _pattern(r"(\d{4})\.(\d{2})\.(\d{2})"), _year_first),
    ("mm/dd/yyyy", _pattern(r"(\d{2})/(\d{2})/(\d{4})"), _month_first),
    ("mm-dd-yyyy", _pattern(r"(\d{2})-(\d{2})-(\d{4})"), _month_first),
    ("dd Mon yyyy", _pattern(r"(\d{2})\s+([A-Za-z]{3})\s+(\d{4})"), _named_month(MONTHS_SHORT)),
    ("dd Month yyyy", _pattern(r"(\d{2})\s+([A-Za-z]+)\s+(\d{4})"), _named_month(MONTHS_LONG)),
]

SUPPORTED_FORMATS = tuple(name for name, _, _ in DATE_FORMATS)


def is_valid_date(year: int, month: int, day: int) -> bool:
    if year < MINYEAR or not 1 <= month <= 12 or day < 1:
        return False
    return day <= calendar.monthrange(year, month)[1]


# ---------- Parsing ----------

def parse_date(value: str) -> Optional[date]:
    """Parse a free-form date string, returning None when no format matches.

    Each format must match the whole (trimmed) string. A match whose numbers
    do not form a real calendar date (e.g. 30.02.2023) falls through to the
    next format rather than raising.
    """
    value = value.strip()
    if not value:
        return None

    for _, regex, extract in DATE_FORMATS:
        m = regex.fullmatch(value)
        if not m:
            continue
        parts = extract(m)
        if parts is None:
            continue
        year, month, day = parts
        if not is_valid_date(year, month, day):
            continue
        return date(year, month, day)
    return None


def is_header_row(cells: Sequence[str]) -> bool:
    """Heuristically decide whether a row holds column labels rather than dates."""
    if len(cells) < 2:
        return False

    first = cells[0].strip().lower()
    second = cells[1].strip().lower()
    for keyword in HEADER_KEYWORDS:
        if keyword in first or keyword in second:
            return True

    return parse_date(cells[0]) is None or parse_date(cells[1]) is None


def format_date(value: date) -> str:
    """Render as dd.mm.yyyy."""
    return f"{value.day:02d}.{value.month:02d}.{value.year:04d}"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()
