"""Tests for nearest-point hover resolution."""

from __future__ import annotations

import pytest

from src.layout.hover import HoverResolver, nearest_index, resolve_hover
from src.layout.scales import BandScale


class TestNearestIndex:
    def test_exact_hits(self) -> None:
        values = [10.0, 20.0, 30.0, 40.0]
        for i, v in enumerate(values):
            assert nearest_index(values, v) == i

    def test_closest_wins(self) -> None:
        values = [10.0, 20.0, 30.0]
        assert nearest_index(values, 14.9) == 0
        assert nearest_index(values, 15.1) == 1
        assert nearest_index(values, 29.0) == 2

    def test_tie_goes_to_lower_index(self) -> None:
        assert nearest_index([10.0, 20.0, 30.0], 25.0) == 1

    def test_clamps_outside_range(self) -> None:
        values = [10.0, 20.0, 30.0]
        assert nearest_index(values, -100.0) == 0
        assert nearest_index(values, 1e9) == 2

    def test_single_item(self) -> None:
        assert nearest_index([5.0], 100.0) == 0

    def test_key_extractor(self) -> None:
        items = [{"x": 1.0}, {"x": 4.0}, {"x": 9.0}]
        assert nearest_index(items, 5.0, key=lambda d: d["x"]) == 1

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            nearest_index([], 1.0)


class TestHoverResolver:
    def test_pointer_on_every_band_centre(self) -> None:
        days = list(range(1, 366))
        band = BandScale(days, (0, 800), padding_inner=0.2, padding_outer=0.2)
        resolver = HoverResolver(band)
        for i, day in enumerate(days):
            assert resolver.resolve(band.center(day)) == i
            assert resolver.day_index_at(band.center(day)) == day

    def test_pointer_in_gap_between_bands(self) -> None:
        band = BandScale([1, 2, 3], (0, 300), padding_inner=0, padding_outer=0)
        resolver = HoverResolver(band)
        # centres at 50, 150, 250
        assert resolver.resolve(99.0) == 0
        assert resolver.resolve(101.0) == 1
        assert resolver.resolve(100.0) == 0

    def test_resolve_hover(self) -> None:
        assert resolve_hover([1, 2, 3], 250.0, width=300, padding=0) == 2
        assert resolve_hover([1, 2, 3], 0.0, width=300, padding=0) == 0
