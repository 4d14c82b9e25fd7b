"""
Calendar heatmap layout for a single month.

Weeks start on Sunday (column 0). The displayed month is the month of the
earliest entry; entries from any other month are left out of the grid and
logged, since the heatmap shows one month only.
"""
from __future__ import annotations

import calendar
import datetime
import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from matplotlib.colors import to_hex, to_rgb

from config.settings import CALENDAR_HIGH_COLOR, CALENDAR_LOW_COLOR
from src.analysis.entries import Entry

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class CalendarCell:
    day: int
    row: int
    col: int
    count: int


@dataclass(frozen=True)
class CalendarLayout:
    year: int
    month: int  # 1-12
    start_weekday: int  # weekday of day 1, Sunday = 0
    days_in_month: int
    rows: int
    cells: List[CalendarCell]

    @property
    def max_count(self) -> int:
        """Largest day count, never below 1 so the colour domain is never empty."""
        return max([1] + [c.count for c in self.cells])

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"


def sunday_weekday(day: datetime.date) -> int:
    # date.weekday() has Monday = 0
    return (day.weekday() + 1) % 7


def cell_position(day: int, start_weekday: int) -> tuple:
    slot = start_weekday + day - 1
    return slot // 7, slot % 7


def layout_calendar(entries: Sequence[Entry]) -> CalendarLayout:
    """
    Place every day of the displayed month on a 7-column grid.

    Args:
        entries: Non-empty entries; only the earliest entry's month is shown

    Returns:
        CalendarLayout with one cell per day of the month

    Raises:
        ValueError: if entries is empty
    """
    if not entries:
        raise ValueError("layout_calendar requires at least one entry")

    first = min(e.date for e in entries)
    year, month = first.year, first.month

    in_month = Counter(e.date.day for e in entries if (e.date.year, e.date.month) == (year, month))
    outside = len(entries) - sum(in_month.values())
    if outside:
        logger.warning(
            f"Calendar shows {calendar.month_name[month]} {year} only; {outside} entries from other months are not displayed"
        )

    start_weekday = sunday_weekday(datetime.date(year, month, 1))
    days_in_month = calendar.monthrange(year, month)[1]
    rows = math.ceil((start_weekday + days_in_month) / 7)

    cells = []
    for day in range(1, days_in_month + 1):
        row, col = cell_position(day, start_weekday)
        cells.append(CalendarCell(day=day, row=row, col=col, count=in_month.get(day, 0)))

    return CalendarLayout(year, month, start_weekday, days_in_month, rows, cells)


def count_color(
    count: int,
    max_count: int,
    low: str = CALENDAR_LOW_COLOR,
    high: str = CALENDAR_HIGH_COLOR,
) -> str:
    """Linear interpolation from ``low`` (0) to ``high`` (max_count) as a hex colour."""
    t = min(max(count / max(1, max_count), 0.0), 1.0)
    rgb = (1 - t) * np.array(to_rgb(low)) + t * np.array(to_rgb(high))
    return to_hex(rgb)
