"""
Static dashboard output.

For every participant filter option, recompute the derived state and write the
charts, leaderboards and a text summary into ``<output_dir>/<option>/``. An
``index.md`` at the top links every option. Empty selections and load failures
produce placeholder charts rather than errors.
"""
from __future__ import annotations

import logging
import os
import re
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from config.settings import (
    ALL_PARTICIPANTS,
    PLOT_FIGSIZE_CALENDAR,
    PLOT_FIGSIZE_DAILY,
    PLOT_FIGSIZE_DONUT,
)
from src.analysis.aggregation import LeaderboardRow
from src.analysis.entries import Entry
from src.analysis.filter_state import DerivedState, filter_options, recompute
from src.visualization.charts import (
    attach_daily_hover,
    attach_donut_hover,
    compute_barh_fig_height,
    create_and_save_figure,
    paint_calendar,
    paint_daily,
    paint_donut,
    paint_leaderboard,
    paint_placeholder,
)

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data"
LOAD_FAILED_MESSAGE = "Unable to load data"

CHART_FILES = {
    "donut": "games_donut.png",
    "calendar": "calendar_heatmap.png",
    "daily": "daily_totals.png",
    "plays": "leaderboard_plays.png",
    "days": "leaderboard_days.png",
}


def safe_filename(text: Optional[str], max_len: int = 120) -> str:
    if not text:
        return "unknown"
    s = str(text).replace(" ", "_")
    s = re.sub(r"[^A-Za-z0-9._-]", "", s)
    return (s or "unknown")[:max_len]


def option_folders(options: Sequence[str]) -> Dict[str, str]:
    """
    Map each filter option to its own output folder name.

    Names that sanitize to the same folder (case-insensitively, so the result also
    holds on case-insensitive filesystems) get a numeric suffix in option order.
    """
    folders: Dict[str, str] = {}
    taken = set()
    for option in options:
        base = safe_filename(option)
        folder = base
        n = 2
        while folder.lower() in taken:
            folder = f"{base}_{n}"
            n += 1
        taken.add(folder.lower())
        folders[option] = folder
    return folders


def _leaderboard_frame(rows: List[LeaderboardRow], value_name: str) -> pd.DataFrame:
    return pd.DataFrame(
        [(r.rank, r.key, r.value) for r in rows],
        columns=["rank", "person", value_name],
    )


def write_summary(state: DerivedState, path: str, message: str = NO_DATA_MESSAGE) -> str:
    with open(path, "w", encoding="utf-8") as f:
        f.write("Daily Puzzle Stats\n")
        f.write("==================\n\n")
        f.write(f"Participant filter: {state.participant}\n\n")

        if state.is_empty:
            f.write(f"{message}\n")
            return path

        summary = state.summary.as_dict()
        f.write(f"Total plays: {summary['total_plays']}\n")
        f.write(f"Players: {summary['participants']}\n")
        f.write(f"Games: {summary['categories']}\n")
        f.write(f"Active days: {summary['active_days']}\n")
        f.write(f"First day: {summary['first_date']}\n")
        f.write(f"Last day: {summary['last_date']}\n")

        f.write("\nGames\n")
        f.write("-----\n")
        for c in state.category_counts:
            f.write(f"{c.key}: {c.value}\n")

    logger.info(f"Saved summary -> {path}")
    return path


def render_state(state: DerivedState, output_dir: str, message: str = NO_DATA_MESSAGE) -> Dict[str, str]:
    """
    Write every chart for one derived state.

    Args:
        state: Output of recompute
        output_dir: Directory for this filter option
        message: Placeholder text when the state is empty

    Returns:
        Mapping of chart name to written file path (failed charts are left out)
    """
    os.makedirs(output_dir, exist_ok=True)
    written: Dict[str, str] = {}

    def _save(name: str, plot_function, figsize) -> None:
        path = os.path.join(output_dir, CHART_FILES[name])
        if create_and_save_figure(plot_function, path, figsize=figsize):
            written[name] = path

    def plot_donut():
        ax = plt.gca()
        if state.is_empty:
            paint_placeholder(ax, message)
        else:
            paint_donut(ax, state.slices)

    def plot_calendar():
        ax = plt.gca()
        if state.calendar is None:
            paint_placeholder(ax, message)
        else:
            paint_calendar(ax, state.calendar)

    def plot_daily():
        ax = plt.gca()
        if state.daily is None:
            paint_placeholder(ax, message)
        else:
            paint_daily(ax, state.daily, state.day_buckets)

    def plot_plays():
        paint_leaderboard(plt.gca(), state.plays_leaderboard, "Most Plays", "Plays")

    def plot_days():
        paint_leaderboard(plt.gca(), state.days_leaderboard, "Most Days Played", "Days")

    _save("donut", plot_donut, PLOT_FIGSIZE_DONUT)
    _save("calendar", plot_calendar, PLOT_FIGSIZE_CALENDAR)
    _save("daily", plot_daily, PLOT_FIGSIZE_DAILY)
    _save("plays", plot_plays, (8, compute_barh_fig_height(len(state.plays_leaderboard))))
    _save("days", plot_days, (8, compute_barh_fig_height(len(state.days_leaderboard))))

    plays_csv = os.path.join(output_dir, "leaderboard_plays.csv")
    _leaderboard_frame(state.plays_leaderboard, "plays").to_csv(plays_csv, index=False)
    written["plays_csv"] = plays_csv

    days_csv = os.path.join(output_dir, "leaderboard_days.csv")
    _leaderboard_frame(state.days_leaderboard, "days").to_csv(days_csv, index=False)
    written["days_csv"] = days_csv

    written["summary"] = write_summary(state, os.path.join(output_dir, "summary.txt"), message)
    return written


def write_index(options: Sequence[str], output_dir: str, folders: Optional[Dict[str, str]] = None) -> str:
    folders = folders or option_folders(options)
    path = os.path.join(output_dir, "index.md")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Daily Puzzle Stats\n\n")
        for option in options:
            folder = folders[option]
            f.write(f"## {option}\n\n")
            f.write(f"- [Summary]({folder}/summary.txt)\n")
            for name, filename in CHART_FILES.items():
                f.write(f"- ![{name}]({folder}/{filename})\n")
            f.write("\n")
    logger.info(f"Saved index -> {path}")
    return path


def build_site(
    entries: Sequence[Entry],
    output_dir: str,
    participants: Optional[Sequence[str]] = None,
    load_failed: bool = False,
) -> Dict[str, Dict[str, str]]:
    """
    Render one dashboard per participant filter option.

    Args:
        entries: Full entry set (may be empty)
        output_dir: Root output directory
        participants: Options to render; defaults to every filter option
        load_failed: Whether the dataset failed to load (changes the placeholder text)

    Returns:
        Mapping of option to the files written for it
    """
    options = list(participants) if participants else filter_options(entries)
    message = LOAD_FAILED_MESSAGE if load_failed else NO_DATA_MESSAGE
    logger.info(f"Building dashboards for {len(options)} filter options into {output_dir}")

    folders = option_folders(options)
    results: Dict[str, Dict[str, str]] = {}
    for option in options:
        state = recompute(entries, option)
        results[option] = render_state(state, os.path.join(output_dir, folders[option]), message)

    write_index(options, output_dir, folders)
    return results


def show_dashboard(
    entries: Sequence[Entry],
    participant: str = ALL_PARTICIPANTS,
    load_failed: bool = False,
) -> None:
    """Open an interactive window with hover labels on the donut and the daily chart."""
    state = recompute(entries, participant)
    message = LOAD_FAILED_MESSAGE if load_failed else NO_DATA_MESSAGE
    fig, axes = plt.subplots(2, 2, figsize=(16, 12))
    donut_ax, calendar_ax, daily_ax, board_ax = axes.flat

    if state.is_empty:
        for ax in axes.flat:
            paint_placeholder(ax, message)
    else:
        paint_donut(donut_ax, state.slices)
        paint_calendar(calendar_ax, state.calendar)
        twin = paint_daily(daily_ax, state.daily, state.day_buckets)
        paint_leaderboard(board_ax, state.plays_leaderboard, "Most Plays", "Plays")
        attach_donut_hover(fig, donut_ax, state.slices)
        attach_daily_hover(fig, daily_ax, state.daily, state.day_buckets, state.cumulative, twin=twin)

    fig.suptitle(f"Daily Puzzle Stats: {participant}")
    plt.show()
