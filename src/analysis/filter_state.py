"""
Participant filter and the derived chart state.

The selected participant is an explicit argument: every change produces a fresh
DerivedState from the untouched base entries. Charts check ``is_empty`` before
touching the layouts, which are None when there is nothing to draw.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from config.settings import ALL_PARTICIPANTS
from src.analysis.aggregation import (
    AggregatedCount,
    LeaderboardRow,
    Summary,
    by_category,
    by_participant,
    distinct_sorted,
    group_count,
    leaderboard,
    rank_by_count,
    rank_by_distinct_days,
    summarize,
)
from src.analysis.date_range import CumulativeBucket, DayBucket, build_cumulative, build_day_buckets
from src.analysis.entries import Entry
from src.layout.calendar_grid import CalendarLayout, layout_calendar
from src.layout.pie import SliceGeometry, layout_pie
from src.layout.scales import DualAxisLayout, layout_dual_axis

logger = logging.getLogger(__name__)


def filter_options(entries: Sequence[Entry]) -> List[str]:
    """Values for the participant selector: "All" then every participant, ascending."""
    return [ALL_PARTICIPANTS] + distinct_sorted(entries, by_participant)


def apply_filter(entries: Sequence[Entry], participant: str = ALL_PARTICIPANTS) -> List[Entry]:
    if participant == ALL_PARTICIPANTS:
        return list(entries)
    return [e for e in entries if e.participant == participant]


@dataclass(frozen=True)
class DerivedState:
    participant: str
    entries: List[Entry]
    summary: Summary
    category_counts: List[AggregatedCount] = field(default_factory=list)
    plays_leaderboard: List[LeaderboardRow] = field(default_factory=list)
    days_leaderboard: List[LeaderboardRow] = field(default_factory=list)
    day_buckets: List[DayBucket] = field(default_factory=list)
    cumulative: List[CumulativeBucket] = field(default_factory=list)
    slices: List[SliceGeometry] = field(default_factory=list)
    calendar: Optional[CalendarLayout] = None
    daily: Optional[DualAxisLayout] = None

    @property
    def is_empty(self) -> bool:
        return not self.entries


def recompute(entries: Sequence[Entry], participant: str = ALL_PARTICIPANTS) -> DerivedState:
    """
    Rebuild every aggregate and layout for one participant selection.

    Args:
        entries: Full, unfiltered entry set
        participant: A value from filter_options ("All" means no filter)

    Returns:
        DerivedState; empty selections carry no layouts
    """
    selected = apply_filter(entries, participant)
    logger.info(f"Recomputing charts for '{participant}' ({len(selected)} entries)")

    if not selected:
        return DerivedState(participant=participant, entries=[], summary=summarize([]))

    category_counts = group_count(selected, by_category)
    day_buckets = build_day_buckets(selected)
    cumulative = build_cumulative(day_buckets)

    return DerivedState(
        participant=participant,
        entries=selected,
        summary=summarize(selected),
        category_counts=category_counts,
        plays_leaderboard=leaderboard(rank_by_count(selected, by_participant)),
        days_leaderboard=leaderboard(rank_by_distinct_days(selected, by_participant)),
        day_buckets=day_buckets,
        cumulative=cumulative,
        slices=layout_pie(category_counts),
        calendar=layout_calendar(selected),
        daily=layout_dual_axis(day_buckets, cumulative),
    )
