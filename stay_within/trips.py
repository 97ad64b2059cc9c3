from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from .dates import is_header_row, parse_date

log = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")
_CELL_SPLIT = re.compile(r"[,\t]")


# ---------- Domain ----------

@dataclass(frozen=True)
class Trip:
    """A continuous period abroad (inclusive of both start and end)."""

    start: date
    end: date
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Trip end date cannot be before start date")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


# ---------- Parsing ----------

def parse_trips_from_text(text: str) -> List[Trip]:
    """Turn comma- or tab-delimited text into trips sorted by end date.

    Only the first row with at least two cells is checked for a header. Rows
    with fewer than two cells, unparseable dates, or an end before the start
    are dropped; nothing here raises for malformed input.
    """
    lines = _LINE_SPLIT.split(text)
    if not any(line.strip() for line in lines):
        return []

    trips: List[Trip] = []
    first_row = True
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        cells = [c.strip() for c in _CELL_SPLIT.split(line)]
        if len(cells) < 2:
            log.debug("Skipping line %d: fewer than two cells", lineno)
            continue

        if first_row:
            first_row = False
            if is_header_row(cells):
                log.debug("Skipping line %d: header row", lineno)
                continue

        start = parse_date(cells[0])
        end = parse_date(cells[1])
        if start is None or end is None:
            log.debug("Skipping line %d: unparseable dates %r, %r", lineno, cells[0], cells[1])
            continue
        if end < start:
            log.debug("Skipping line %d: end %s is before start %s", lineno, end, start)
            continue

        notes = cells[2] if len(cells) > 2 and cells[2] else None
        trips.append(Trip(start, end, notes))

    trips.sort(key=lambda t: t.end)
    log.debug("Parsed %d trips from %d lines", len(trips), len(lines))
    return trips
