"""Shared fixtures for the puzzle stats tests."""

from __future__ import annotations

import datetime
import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from src.analysis.entries import Entry  # noqa: E402


def make_entry(day: str, person: str, game: str) -> Entry:
    """Build an Entry from an ISO date string."""
    return Entry(datetime.date.fromisoformat(day), person, game)


@pytest.fixture()
def scenario_rows() -> list[dict[str, str]]:
    return [
        {"Date": "1/1/2025", "Person": "A", "Game": "Chess"},
        {"Date": "1/1/2025", "Person": "B", "Game": "Chess"},
        {"Date": "1/3/2025", "Person": "A", "Game": "Go"},
    ]


@pytest.fixture()
def scenario_entries() -> list[Entry]:
    return [
        make_entry("2025-01-01", "A", "Chess"),
        make_entry("2025-01-01", "B", "Chess"),
        make_entry("2025-01-03", "A", "Go"),
    ]


@pytest.fixture()
def sample_csv(tmp_path, scenario_rows) -> str:
    path = tmp_path / "puzzles.csv"
    lines = ["Date,Person,Game"] + [f"{r['Date']},{r['Person']},{r['Game']}" for r in scenario_rows]
    path.write_text("\n".join(lines) + "\n")
    return str(path)
