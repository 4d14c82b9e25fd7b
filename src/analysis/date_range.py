"""
Dense day series: one bucket per calendar day between the first and last entry,
zero-filled, plus running totals over those buckets.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from itertools import accumulate
from typing import List, Sequence, Tuple

import pandas as pd

from src.analysis.entries import Entry


@dataclass(frozen=True)
class DayBucket:
    day_index: int  # 1-based
    count: int
    date: datetime.date


@dataclass(frozen=True)
class CumulativeBucket:
    day_index: int
    total: int
    date: datetime.date


def date_bounds(entries: Sequence[Entry]) -> Tuple[datetime.date, datetime.date]:
    if not entries:
        raise ValueError("date_bounds requires at least one entry")
    dates = [e.date for e in entries]
    return min(dates), max(dates)


def build_day_buckets(entries: Sequence[Entry]) -> List[DayBucket]:
    """
    Count entries per day over the full inclusive date range.

    Args:
        entries: Non-empty entry set; callers render a placeholder for empty sets

    Returns:
        One bucket per day from the earliest to the latest entry, in date order

    Raises:
        ValueError: if entries is empty
    """
    start, end = date_bounds(entries)
    full_range = [ts.date() for ts in pd.date_range(start=start, end=end, freq="D")]

    per_day = pd.Series([e.date for e in entries], dtype=object).value_counts()
    daily = per_day.reindex(full_range, fill_value=0)

    return [
        DayBucket(day_index=i, count=int(count), date=day)
        for i, (day, count) in enumerate(daily.items(), start=1)
    ]


def build_cumulative(buckets: Sequence[DayBucket]) -> List[CumulativeBucket]:
    """Running total of day counts, one output per input bucket."""
    ordered = sorted(buckets, key=lambda b: b.day_index)
    totals = accumulate(b.count for b in ordered)
    return [
        CumulativeBucket(day_index=b.day_index, total=total, date=b.date)
        for b, total in zip(ordered, totals)
    ]
