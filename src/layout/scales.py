"""
Band and linear scales for the daily totals chart.

Days sit on a band scale along x. Daily counts (bars) and running totals (line)
each get their own linear y scale, niced to round bounds, sharing the x axis.
Vertical ranges are y-up: value 0 maps to the bottom of the plot area.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Hashable, List, Sequence, Tuple

from config.settings import BAND_PADDING, CHART_HEIGHT, CHART_WIDTH, NICE_TICK_COUNT
from src.analysis.date_range import CumulativeBucket, DayBucket

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Round tick step for ``count`` ticks over [start, stop].

    Positive results are the step itself; negative results ``-k`` mean a step of ``1/k``
    (kept as an integer inverse so fractional steps stay exact).
    """
    if count <= 0 or stop <= start:
        return 0
    step = (stop - start) / count
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def nice(self, count: int = NICE_TICK_COUNT) -> "LinearScale":
        """Return a copy whose domain is extended to round tick boundaries."""
        start, stop = self.domain
        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                # + 0.0 turns a -0.0 lower bound into 0.0
                return LinearScale((start + 0.0, stop + 0.0), self.range)
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step
        return self

    def ticks(self, count: int = NICE_TICK_COUNT) -> List[float]:
        start, stop = self.domain
        step = tick_increment(start, stop, count)
        if step > 0:
            return [i * step for i in range(math.ceil(start / step), math.floor(stop / step) + 1)]
        if step < 0:
            return [i / -step for i in range(math.ceil(start * -step), math.floor(stop * -step) + 1)]
        return [start]


def count_scale(max_value: float, height: float = CHART_HEIGHT) -> LinearScale:
    # an all-zero series still gets a usable [0, 1] domain
    return LinearScale((0, max(1, max_value)), (0, height)).nice()


@dataclass(frozen=True)
class BandScale:
    """Evenly spaced bands over an ordinal domain, centred in the range."""

    domain: Tuple[Hashable, ...]
    range: Tuple[float, float]
    padding_inner: float = BAND_PADDING
    padding_outer: float = BAND_PADDING
    align: float = 0.5
    _index: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "domain", tuple(self.domain))
        object.__setattr__(self, "_index", {d: i for i, d in enumerate(self.domain)})

    @property
    def step(self) -> float:
        r0, r1 = self.range
        n = len(self.domain)
        return (r1 - r0) / max(1, n - self.padding_inner + self.padding_outer * 2)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding_inner)

    @property
    def start(self) -> float:
        r0, r1 = self.range
        n = len(self.domain)
        return r0 + (r1 - r0 - self.step * (n - self.padding_inner)) * self.align

    def __call__(self, value: Hashable) -> float:
        """Left edge of the band for ``value``."""
        return self.start + self.step * self._index[value]

    def center(self, value: Hashable) -> float:
        return self(value) + self.bandwidth / 2

    def centers(self) -> List[float]:
        return [self.start + self.step * i + self.bandwidth / 2 for i in range(len(self.domain))]


@dataclass(frozen=True)
class Bar:
    day_index: int
    x: float
    width: float
    height: float


@dataclass(frozen=True)
class DualAxisLayout:
    band: BandScale
    count_scale: LinearScale
    total_scale: LinearScale
    bars: List[Bar]
    line: List[Tuple[float, float]]

    @property
    def centers(self) -> List[float]:
        return [x for x, _ in self.line]


def layout_dual_axis(
    buckets: Sequence[DayBucket],
    cumulative: Sequence[CumulativeBucket],
    width: float = CHART_WIDTH,
    height: float = CHART_HEIGHT,
    padding: float = BAND_PADDING,
) -> DualAxisLayout:
    """
    Map day buckets to bars and running totals to a line over one shared x axis.

    Args:
        buckets: Zero-filled day buckets
        cumulative: Running totals for the same days
        width: Width of the plot area
        height: Height of the plot area
        padding: Band padding fraction (inner and outer)

    Returns:
        DualAxisLayout with one bar and one line point per day
    """
    if len(buckets) != len(cumulative):
        raise ValueError("buckets and cumulative must cover the same days")

    band = BandScale([b.day_index for b in buckets], (0, width), padding, padding)
    bars_y = count_scale(max((b.count for b in buckets), default=0), height)
    line_y = count_scale(max((c.total for c in cumulative), default=0), height)

    bars = [
        Bar(b.day_index, band(b.day_index), band.bandwidth, bars_y(b.count) - bars_y(0))
        for b in buckets
    ]
    line = [(band.center(c.day_index), line_y(c.total)) for c in cumulative]
    return DualAxisLayout(band, bars_y, line_y, bars, line)
