"""Tests for the participant filter and recompute."""

from __future__ import annotations

from conftest import make_entry
from src.analysis.aggregation import AggregatedCount
from src.analysis.filter_state import apply_filter, filter_options, recompute


class TestFilterOptions:
    def test_all_first_then_sorted(self) -> None:
        entries = [make_entry("2025-01-01", p, "Go") for p in ["Zed", "amy", "Bo", "Zed"]]
        assert filter_options(entries) == ["All", "Bo", "Zed", "amy"]

    def test_empty(self) -> None:
        assert filter_options([]) == ["All"]


class TestApplyFilter:
    def test_all_keeps_everything(self, scenario_entries) -> None:
        assert apply_filter(scenario_entries, "All") == scenario_entries

    def test_selects_one_participant(self, scenario_entries) -> None:
        assert [e.category for e in apply_filter(scenario_entries, "A")] == ["Chess", "Go"]

    def test_does_not_mutate_input(self, scenario_entries) -> None:
        before = list(scenario_entries)
        apply_filter(scenario_entries, "B")
        assert scenario_entries == before


class TestRecompute:
    def test_scenario_all(self, scenario_entries) -> None:
        state = recompute(scenario_entries)
        assert not state.is_empty
        assert state.category_counts == [AggregatedCount("Chess", 2), AggregatedCount("Go", 1)]
        assert [b.count for b in state.day_buckets] == [2, 0, 1]
        assert [c.total for c in state.cumulative] == [2, 2, 3]
        assert [s.key for s in state.slices] == ["Chess", "Go"]
        assert state.calendar is not None and state.calendar.month == 1
        assert len(state.daily.bars) == 3
        assert [(r.rank, r.key, r.value) for r in state.plays_leaderboard] == [(1, "A", 2), (2, "B", 1)]
        assert [(r.rank, r.key, r.value) for r in state.days_leaderboard] == [(1, "A", 2), (2, "B", 1)]

    def test_filtered_state_is_scoped(self, scenario_entries) -> None:
        state = recompute(scenario_entries, "B")
        assert state.participant == "B"
        assert state.summary.total_plays == 1
        assert [b.count for b in state.day_buckets] == [1]
        assert state.category_counts == [AggregatedCount("Chess", 1)]

    def test_unknown_participant_is_empty(self, scenario_entries) -> None:
        state = recompute(scenario_entries, "Nobody")
        assert state.is_empty
        assert state.slices == []
        assert state.calendar is None
        assert state.daily is None

    def test_empty_entries(self) -> None:
        state = recompute([])
        assert state.is_empty
        assert state.summary.total_plays == 0

    def test_recompute_is_independent_per_call(self, scenario_entries) -> None:
        first = recompute(scenario_entries, "A")
        recompute(scenario_entries, "B")
        assert first.summary.total_plays == 2
