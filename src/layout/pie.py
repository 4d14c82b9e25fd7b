"""
Donut layout.

Angles run clockwise from 12 o'clock, in radians. Points are in a y-up frame
centred on the donut, so a point at angle ``a`` and radius ``r`` sits at
``(r * sin(a), r * cos(a))``; that is what matplotlib expects in data coordinates.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from config.settings import (
    PIE_GUIDE_RATIO,
    PIE_INNER_RATIO,
    PIE_LABEL_RATIO,
    PIE_LABEL_THRESHOLD,
    PIE_OUTER_RATIO,
)
from src.analysis.aggregation import AggregatedCount

TAU = 2 * math.pi

Point = Tuple[float, float]


@dataclass(frozen=True)
class SliceGeometry:
    key: str
    value: int
    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    label_elbow: Optional[Tuple[Point, Point, Point]]

    @property
    def mid_angle(self) -> float:
        return self.start_angle + (self.end_angle - self.start_angle) / 2

    @property
    def share(self) -> float:
        return (self.end_angle - self.start_angle) / TAU

    @property
    def label_anchor(self) -> str:
        # text grows away from the donut on either side
        return "start" if self.mid_angle < math.pi else "end"


def polar_point(angle: float, r: float) -> Point:
    return (r * math.sin(angle), r * math.cos(angle))


def _leader_line(mid: float, radius: float, inner: float, outer: float) -> Tuple[Point, Point, Point]:
    centroid = polar_point(mid, (inner + outer) / 2)
    elbow = polar_point(mid, radius * PIE_GUIDE_RATIO)
    side = 1 if mid < math.pi else -1
    label = (side * radius * PIE_LABEL_RATIO, elbow[1])
    return centroid, elbow, label


def layout_pie(
    counts: Sequence[AggregatedCount],
    radius: float = 1.0,
    inner_ratio: float = PIE_INNER_RATIO,
    outer_ratio: float = PIE_OUTER_RATIO,
    threshold: float = PIE_LABEL_THRESHOLD,
) -> List[SliceGeometry]:
    """
    Assign each count a contiguous arc proportional to its value.

    Slices keep input order. Slices whose share of the total is at least
    ``threshold`` get a three-point leader line (centroid, elbow on the guide
    circle, horizontal label anchor); smaller slices get none.

    Args:
        counts: Non-empty counts with a positive total
        radius: Bounding radius
        inner_ratio: Inner radius as a fraction of ``radius``
        outer_ratio: Outer radius as a fraction of ``radius``
        threshold: Minimum share of the total that gets a label

    Returns:
        One SliceGeometry per input count

    Raises:
        ValueError: on empty input or a non-positive total
    """
    if not counts:
        raise ValueError("layout_pie requires at least one count")
    total = sum(c.value for c in counts)
    if total <= 0:
        raise ValueError("layout_pie requires a positive total")

    inner = radius * inner_ratio
    outer = radius * outer_ratio

    slices: List[SliceGeometry] = []
    running = 0
    for c in counts:
        start = TAU * running / total
        running += c.value
        # the last slice closes exactly at a full turn
        end = TAU * running / total
        elbow = None
        if c.value / total >= threshold:
            elbow = _leader_line(start + (end - start) / 2, radius, inner, outer)
        slices.append(SliceGeometry(c.key, c.value, start, end, inner, outer, elbow))
    return slices


def hit_test_slice(slices: Sequence[SliceGeometry], x: float, y: float) -> Optional[int]:
    """Index of the slice containing point (x, y), or None if the point is off the ring."""
    if not slices:
        return None
    r = math.hypot(x, y)
    if not slices[0].inner_radius <= r <= slices[0].outer_radius:
        return None
    angle = math.atan2(x, y) % TAU
    for i, s in enumerate(slices):
        if s.start_angle <= angle < s.end_angle:
            return i
    return None
