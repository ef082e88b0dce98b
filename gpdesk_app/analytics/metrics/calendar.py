"""Month calendar grid arithmetic (pure functions)."""

from __future__ import annotations

import calendar as _calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

import pytz

from gpdesk_app.core.config import TIMEZONE
from gpdesk_app.core.models import IssueModel

GRID_COLUMNS = 7
GRID_ROWS = 6


@dataclass(slots=True)
class CalendarCell:
    row: int
    column: int
    day: int
    count: int = 0


def days_in_month(year: int, month: int) -> int:
    return _calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of day 1 with Sunday as 0 (Python uses Monday as 0)."""
    return (_calendar.weekday(year, month, 1) + 1) % 7


def parse_month(month: str) -> tuple[int, int]:
    year_str, month_str = month.split("-")[:2]
    return int(year_str), int(month_str)


def month_grid(year: int, month: int, counts: dict[int, int] | None = None) -> list[CalendarCell]:
    """One cell per day placed on a Sunday-first 7x6 grid.

    Cells before the first weekday are not emitted; a month never needs more
    than six rows.
    """
    counts = counts or {}
    offset = first_weekday(year, month)
    cells = []
    for day in range(1, days_in_month(year, month) + 1):
        index = offset + day - 1
        row, column = divmod(index, GRID_COLUMNS)
        if row >= GRID_ROWS:
            break
        cells.append(CalendarCell(row=row, column=column, day=day, count=int(counts.get(day, 0))))
    return cells


def dot_radius(count: int) -> float:
    if count <= 0:
        return 0.0
    return min(3.0, 1 + count / 2)


def _local_date(value: datetime, tz) -> datetime:
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(tz)


def count_by_day(issues: Iterable[IssueModel], year: int, month: int, tz_name: str = TIMEZONE) -> dict[int, int]:
    """Issues created per day of the given month, in the dashboard timezone."""
    tz = pytz.timezone(tz_name)
    counts: dict[int, int] = {}
    for issue in issues:
        if issue.created is None:
            continue
        local = _local_date(issue.created, tz)
        if local.year != year or local.month != month:
            continue
        counts[local.day] = counts.get(local.day, 0) + 1
    return counts
