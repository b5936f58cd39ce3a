"""Tests for roadrush.engine.lanes: road and lane geometry."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from roadrush.engine.lanes import Track, lane_layout


class TestLaneLayout:
    def test_road_is_centred_and_70_percent(self):
        """Road covers 70% of the width with equal margins on both sides."""
        layout = lane_layout(400)
        assert layout.road_width == pytest.approx(280)
        assert layout.road_left == pytest.approx(60)
        assert layout.road_right == pytest.approx(340)

    def test_lane_centres_partition_road(self):
        """Three lanes of equal width, centres half a lane in from each lane edge."""
        layout = lane_layout(400)
        assert layout.lane_count == 3
        assert layout.lane_width == pytest.approx(280 / 3)
        for i, c in enumerate(layout.centers):
            assert c == pytest.approx(layout.lane_left(i) + layout.lane_width / 2)
        steps = [b - a for a, b in zip(layout.centers, layout.centers[1:])]
        assert steps == pytest.approx([layout.lane_width] * 2)

    def test_zero_width_track_is_degenerate_not_fatal(self):
        """A zero-width track yields zero-sized lanes without raising."""
        layout = lane_layout(0)
        assert layout.lane_width == 0
        assert layout.centers == (0, 0, 0)

    def test_player_bounds(self):
        """Player left edge stays between road_left+margin and road_right-margin-width."""
        layout = lane_layout(400)
        assert layout.player_bounds(48) == pytest.approx((66, 286))


class TestTrack:
    def test_player_size(self):
        """Car width is 12% of the track (max 64); height is half of 16% (max 100)."""
        assert Track(400, 700).player_size() == pytest.approx((48, 50))
        assert Track(1000, 1000).player_size() == pytest.approx((64, 50))

    def test_player_origin(self):
        """Fresh player is centred horizontally and raised off the bottom edge."""
        x, y = Track(400, 700).player_origin()
        assert x == pytest.approx(176)
        assert y == pytest.approx(700 - 50 - 28 - 60)
