"""Tests for the month grid layout and its colour scale."""

from __future__ import annotations

import datetime

import pytest

from conftest import make_entry
from src.layout.calendar_grid import count_color, layout_calendar, sunday_weekday


class TestLayoutCalendar:
    def test_january_2025(self, scenario_entries) -> None:
        layout = layout_calendar(scenario_entries)
        # 1 January 2025 was a Wednesday
        assert (layout.year, layout.month) == (2025, 1)
        assert layout.start_weekday == 3
        assert layout.days_in_month == 31
        assert layout.rows == 5
        assert len(layout.cells) == 31
        first = layout.cells[0]
        assert (first.day, first.row, first.col, first.count) == (1, 0, 3, 2)
        assert layout.cells[2].count == 1
        assert layout.cells[1].count == 0
        assert layout.title == "January 2025"

    def test_cells_are_unique_and_follow_slot_formula(self) -> None:
        for day in ["2024-02-10", "2025-02-01", "2025-06-30", "2026-08-15"]:
            layout = layout_calendar([make_entry(day, "A", "Go")])
            positions = [(c.row, c.col) for c in layout.cells]
            assert len(set(positions)) == len(positions)
            for c in layout.cells:
                assert c.row * 7 + c.col == layout.start_weekday + c.day - 1
                assert 0 <= c.col < 7
                assert c.row < layout.rows

    def test_leap_february(self) -> None:
        layout = layout_calendar([make_entry("2024-02-10", "A", "Go")])
        assert layout.days_in_month == 29

    def test_six_row_month(self) -> None:
        # 1 March 2025 was a Saturday: 6 + 31 slots need 6 weeks
        layout = layout_calendar([make_entry("2025-03-05", "A", "Go")])
        assert layout.start_weekday == 6
        assert layout.rows == 6

    def test_four_row_month(self) -> None:
        # February 2026 starts on a Sunday and has 28 days
        layout = layout_calendar([make_entry("2026-02-02", "A", "Go")])
        assert layout.start_weekday == 0
        assert layout.rows == 4

    def test_shows_month_of_earliest_entry_and_warns(self, caplog) -> None:
        entries = [
            make_entry("2025-02-03", "A", "Go"),
            make_entry("2025-01-30", "A", "Go"),
            make_entry("2025-02-04", "A", "Go"),
        ]
        with caplog.at_level("WARNING"):
            layout = layout_calendar(entries)
        assert layout.month == 1
        assert sum(c.count for c in layout.cells) == 1
        assert "2 entries from other months" in caplog.text

    def test_max_count_is_floored_at_one(self) -> None:
        layout = layout_calendar([make_entry("2025-01-01", "A", "Go")])
        assert layout.max_count == 1
        busy = layout_calendar([make_entry("2025-01-01", p, "Go") for p in "ABCD"])
        assert busy.max_count == 4

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            layout_calendar([])


class TestSundayWeekday:
    def test_sunday_is_zero(self) -> None:
        assert sunday_weekday(datetime.date(2025, 1, 5)) == 0
        assert sunday_weekday(datetime.date(2025, 1, 4)) == 6


class TestCountColor:
    def test_endpoints(self) -> None:
        assert count_color(0, 4, "#000000", "#ffffff") == "#000000"
        assert count_color(4, 4, "#000000", "#ffffff") == "#ffffff"

    def test_midpoint_is_linear(self) -> None:
        assert count_color(1, 2, "#000000", "#ffffff") == "#808080"

    def test_zero_max_does_not_divide_by_zero(self) -> None:
        assert count_color(0, 0, "#000000", "#ffffff") == "#000000"
