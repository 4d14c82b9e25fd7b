"""
Nearest-point resolution for pointer hover.
"""
from __future__ import annotations

from bisect import bisect_left
from typing import Callable, Optional, Sequence

from config.settings import BAND_PADDING, CHART_WIDTH
from src.layout.scales import BandScale


def nearest_index(items: Sequence, x: float, key: Optional[Callable] = None) -> int:
    """
    Index of the item whose key is closest to ``x``.

    ``items`` must be sorted ascending by ``key``. Runs a bisect-center search in
    O(log n); when ``x`` is exactly halfway between two keys the lower index wins.

    Raises:
        ValueError: if items is empty
    """
    if not items:
        raise ValueError("nearest_index requires at least one item")
    if key is None:
        key = _identity
    hi = len(items) - 1
    i = bisect_left(items, x, 0, hi, key=key)
    if i > 0 and x - key(items[i - 1]) <= key(items[i]) - x:
        return i - 1
    return i


def _identity(value):
    return value


class HoverResolver:
    """Resolves pointer offsets to day positions; band centres are computed once."""

    def __init__(self, band: BandScale):
        self.domain = band.domain
        self.centers = band.centers()

    def resolve(self, pointer_x: float) -> int:
        """Position (0-based) of the band whose centre is closest to ``pointer_x``."""
        return nearest_index(self.centers, pointer_x)

    def day_index_at(self, pointer_x: float):
        return self.domain[self.resolve(pointer_x)]


def resolve_hover(
    day_indexes: Sequence[int],
    pointer_x: float,
    width: float = CHART_WIDTH,
    padding: float = BAND_PADDING,
) -> int:
    """
    Position of the day closest to ``pointer_x`` on a band scale over ``[0, width]``.

    Args:
        day_indexes: Day indexes in display order
        pointer_x: Pointer offset from the left edge of the plot area
        width: Width of the plot area
        padding: Band padding fraction

    Returns:
        0-based position into ``day_indexes``
    """
    band = BandScale(day_indexes, (0, width), padding, padding)
    return HoverResolver(band).resolve(pointer_x)
