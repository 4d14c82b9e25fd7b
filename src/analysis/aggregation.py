"""
Pure aggregations over entries: counts by key, rankings and headline numbers.

Every function keeps first-seen order for equal counts, so two games played the
same number of times stay in the order they first appear in the log.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import pandas as pd
from scipy import stats

from src.analysis.entries import Entry

KeyFn = Callable[[Entry], str]


def by_participant(entry: Entry) -> str:
    return entry.participant


def by_category(entry: Entry) -> str:
    return entry.category


@dataclass(frozen=True)
class AggregatedCount:
    key: str
    value: int


@dataclass(frozen=True)
class LeaderboardRow:
    rank: int
    key: str
    value: int


def _keys(entries: Iterable[Entry], key_fn: KeyFn) -> pd.Series:
    return pd.Series([key_fn(e) for e in entries], dtype=object)


def _to_counts(series: pd.Series) -> List[AggregatedCount]:
    return [AggregatedCount(key=str(k), value=int(v)) for k, v in series.items()]


def group_count(entries: Sequence[Entry], key_fn: KeyFn) -> List[AggregatedCount]:
    """Count entries per key in first-seen key order; absent keys never appear."""
    keys = _keys(entries, key_fn)
    if keys.empty:
        return []
    return _to_counts(keys.groupby(keys, sort=False).size())


def distinct_sorted(entries: Sequence[Entry], key_fn: KeyFn) -> List[str]:
    return sorted({key_fn(e) for e in entries})


def rank_by_count(entries: Sequence[Entry], key_fn: KeyFn) -> List[AggregatedCount]:
    """Entries per key, highest first."""
    keys = _keys(entries, key_fn)
    if keys.empty:
        return []
    counts = keys.groupby(keys, sort=False).size()
    # mergesort is stable: ties keep first-seen order
    return _to_counts(counts.sort_values(ascending=False, kind="mergesort"))


def rank_by_distinct_days(entries: Sequence[Entry], key_fn: KeyFn) -> List[AggregatedCount]:
    """
    Distinct calendar days per key, highest first.

    Several entries by the same key on the same day count once.
    """
    if not entries:
        return []
    df = pd.DataFrame({"key": [key_fn(e) for e in entries], "date": [e.date for e in entries]})
    days = df.drop_duplicates().groupby("key", sort=False).size()
    return _to_counts(days.sort_values(ascending=False, kind="mergesort"))


def leaderboard(counts: Sequence[AggregatedCount]) -> List[LeaderboardRow]:
    """
    Attach competition ranks (1, 2, 2, 4) to an already ranked list.

    Args:
        counts: Output of rank_by_count or rank_by_distinct_days

    Returns:
        Rows in the same order, tied values sharing the better rank
    """
    if not counts:
        return []
    ranks = stats.rankdata([-c.value for c in counts], method="min")
    return [LeaderboardRow(rank=int(r), key=c.key, value=c.value) for r, c in zip(ranks, counts)]


@dataclass(frozen=True)
class Summary:
    total_plays: int
    participants: int
    categories: int
    active_days: int
    first_date: Optional[datetime.date]
    last_date: Optional[datetime.date]

    def as_dict(self) -> Dict[str, object]:
        return {
            "total_plays": self.total_plays,
            "participants": self.participants,
            "categories": self.categories,
            "active_days": self.active_days,
            "first_date": self.first_date.isoformat() if self.first_date else "N/A",
            "last_date": self.last_date.isoformat() if self.last_date else "N/A",
        }


def summarize(entries: Sequence[Entry]) -> Summary:
    dates = {e.date for e in entries}
    return Summary(
        total_plays=len(entries),
        participants=len({e.participant for e in entries}),
        categories=len({e.category for e in entries}),
        active_days=len(dates),
        first_date=min(dates) if dates else None,
        last_date=max(dates) if dates else None,
    )
