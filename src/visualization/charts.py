"""
Matplotlib painting for the chart layouts.

Each ``paint_*`` function draws an already computed layout onto an Axes; no
aggregation or geometry happens here. ``attach_*_hover`` wires pointer movement
to the hover label when the figure is shown interactively.
"""
from __future__ import annotations

import logging
import math
import os
from typing import Callable, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.patches import Rectangle, Wedge

from config.settings import BAR_COLOR, LABEL_MAX_CHARS, LINE_COLOR, PIE_COLORMAP
from src.analysis.aggregation import LeaderboardRow
from src.analysis.date_range import CumulativeBucket, DayBucket
from src.layout.calendar_grid import WEEKDAY_LABELS, CalendarLayout, count_color
from src.layout.hover import HoverResolver
from src.layout.pie import SliceGeometry, hit_test_slice
from src.layout.scales import DualAxisLayout

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Plot configuration
# -----------------------------------------------------------------------------
sns.set(style="whitegrid")
sns.set_palette("colorblind")

ELLIPSIS = "..."
MAX_DATE_TICKS = 31


def truncate_text(text: Optional[str], max_chars: int = LABEL_MAX_CHARS) -> str:
    if not text:
        return ""
    s = str(text)
    if len(s) <= max_chars:
        return s
    cut = max(0, max_chars - len(ELLIPSIS))
    return (s[:cut] + ELLIPSIS) if cut > 0 else ELLIPSIS


def create_and_save_figure(
    plot_function: Callable[[], None],
    filename: str,
    figsize: Tuple[float, float] = (10, 6),
) -> bool:
    """
    Run a plot function on a fresh figure and save it.

    Failures are logged and reported through the return value so one broken chart
    does not stop the others.
    """
    output_dir = os.path.dirname(filename)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    fig = plt.figure(figsize=figsize)
    try:
        plot_function()
        fig.tight_layout()
        fig.savefig(filename, bbox_inches="tight")
        logger.info(f"Saved figure -> {filename}")
        return True
    except Exception as e:
        logger.error(f"Failed saving figure {filename}: {e}")
        return False
    finally:
        plt.close(fig)


def paint_placeholder(ax, message: str) -> None:
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=14, color="gray", transform=ax.transAxes)
    ax.set_axis_off()


# -----------------------------------------------------------------------------
# Donut
# -----------------------------------------------------------------------------
def _mpl_degrees(angle: float) -> float:
    # layout angles run clockwise from 12 o'clock; matplotlib's run counterclockwise from 3 o'clock
    return 90.0 - math.degrees(angle)


def paint_donut(ax, slices: Sequence[SliceGeometry], title: str = "Games Played") -> None:
    colors = sns.color_palette(PIE_COLORMAP, max(1, len(slices)))
    for s, color in zip(slices, colors):
        ax.add_patch(
            Wedge(
                (0, 0),
                s.outer_radius,
                _mpl_degrees(s.end_angle),
                _mpl_degrees(s.start_angle),
                width=s.outer_radius - s.inner_radius,
                facecolor=color,
                edgecolor="white",
            )
        )
        if s.label_elbow is None:
            continue
        xs, ys = zip(*s.label_elbow)
        ax.plot(xs, ys, color="gray", linewidth=0.8)
        ax.text(
            xs[-1],
            ys[-1],
            f"{truncate_text(s.key)} ({s.value})",
            ha="left" if s.label_anchor == "start" else "right",
            va="center",
            fontsize=9,
        )

    ax.set_xlim(-1.4, 1.4)
    ax.set_ylim(-1.1, 1.1)
    ax.set_aspect("equal")
    ax.set_axis_off()
    ax.set_title(title)


def attach_donut_hover(fig, ax, slices: Sequence[SliceGeometry]) -> int:
    label = ax.text(0, 0, "", ha="center", va="center", fontsize=11)

    def on_move(event):
        if event.inaxes is not ax or event.xdata is None:
            return
        i = hit_test_slice(slices, event.xdata, event.ydata)
        label.set_text("" if i is None else f"{slices[i].key}\n{slices[i].value}")
        fig.canvas.draw_idle()

    return fig.canvas.mpl_connect("motion_notify_event", on_move)


# -----------------------------------------------------------------------------
# Calendar heatmap
# -----------------------------------------------------------------------------
def paint_calendar(ax, layout: CalendarLayout, gap: float = 0.08) -> None:
    max_count = layout.max_count
    for cell in layout.cells:
        # rows grow downwards
        y = layout.rows - 1 - cell.row
        ax.add_patch(
            Rectangle(
                (cell.col + gap / 2, y + gap / 2),
                1 - gap,
                1 - gap,
                facecolor=count_color(cell.count, max_count),
                edgecolor="none",
            )
        )
        ax.text(cell.col + 0.5, y + 0.5, str(cell.day), ha="center", va="center", fontsize=9)

    for col, name in enumerate(WEEKDAY_LABELS):
        ax.text(col + 0.5, layout.rows + 0.3, name, ha="center", va="center", fontsize=9, color="dimgray")

    ax.set_xlim(0, 7)
    ax.set_ylim(0, layout.rows + 0.7)
    ax.set_aspect("equal")
    ax.set_axis_off()
    ax.set_title(layout.title)


# -----------------------------------------------------------------------------
# Daily totals (bars) + running total (line)
# -----------------------------------------------------------------------------
def _date_tick_step(n_days: int) -> int:
    return max(1, math.ceil(n_days / MAX_DATE_TICKS))


def paint_daily(ax, layout: DualAxisLayout, buckets: Sequence[DayBucket]):
    """Draw bars against the left axis and the running total against a twin right axis."""
    width = layout.band.range[1]
    height = layout.count_scale.range[1]

    ax.bar(
        [b.x for b in layout.bars],
        [b.height for b in layout.bars],
        width=[b.width for b in layout.bars],
        align="edge",
        color=BAR_COLOR,
        label="Plays per day",
    )
    ax.set_xlim(0, width)
    ax.set_ylim(0, height)

    count_ticks = layout.count_scale.ticks()
    ax.set_yticks([layout.count_scale(t) for t in count_ticks])
    ax.set_yticklabels([f"{t:g}" for t in count_ticks])
    ax.set_ylabel("Plays per day")

    step = _date_tick_step(len(buckets))
    shown = list(range(0, len(buckets), step))
    ax.set_xticks([layout.centers[i] for i in shown])
    ax.set_xticklabels([buckets[i].date.strftime("%m/%d") for i in shown], rotation=90)
    ax.set_xlabel("Date")

    ax2 = ax.twinx()
    xs, ys = zip(*layout.line) if layout.line else ((), ())
    ax2.plot(xs, ys, color=LINE_COLOR, linewidth=2, marker="o", markersize=3, label="Running total")
    ax2.set_ylim(0, height)
    total_ticks = layout.total_scale.ticks()
    ax2.set_yticks([layout.total_scale(t) for t in total_ticks])
    ax2.set_yticklabels([f"{t:g}" for t in total_ticks])
    ax2.set_ylabel("Running total")
    ax2.grid(False)

    ax.set_title("Plays per Day and Running Total")
    return ax2


def attach_daily_hover(
    fig,
    ax,
    layout: DualAxisLayout,
    buckets: Sequence[DayBucket],
    cumulative: Sequence[CumulativeBucket],
    twin=None,
) -> int:
    resolver = HoverResolver(layout.band)
    label = ax.annotate(
        "",
        xy=(0, 0),
        xytext=(10, 10),
        textcoords="offset points",
        bbox={"boxstyle": "round", "fc": "white", "alpha": 0.9},
    )
    label.set_visible(False)

    def on_move(event):
        if event.xdata is None or event.inaxes not in (ax, twin):
            return
        i = resolver.resolve(event.xdata)
        b, c = buckets[i], cumulative[i]
        label.xy = layout.line[i]
        label.set_text(f"{b.date.strftime('%m/%d/%Y')}\n{b.count} plays, {c.total} total")
        label.set_visible(True)
        fig.canvas.draw_idle()

    return fig.canvas.mpl_connect("motion_notify_event", on_move)


# -----------------------------------------------------------------------------
# Leaderboard
# -----------------------------------------------------------------------------
def paint_leaderboard(ax, rows: List[LeaderboardRow], title: str, xlabel: str) -> None:
    if not rows:
        paint_placeholder(ax, "No data")
        return
    labels = [f"{r.rank}. {truncate_text(r.key)}" for r in rows]
    values = [r.value for r in rows]
    y = list(range(len(rows)))
    ax.barh(y, values, color=sns.color_palette("colorblind", 1)[0])
    ax.set_yticks(y)
    ax.set_yticklabels(labels)
    ax.invert_yaxis()  # rank 1 on top
    ax.set_xlabel(xlabel)
    ax.set_title(title)


def compute_barh_fig_height(
    n_bars: int,
    row_height: float = 0.35,
    min_height: float = 3.0,
    max_height: float = 30.0,
) -> float:
    h = n_bars * row_height + 2.0
    return max(min_height, min(max_height, h))
