"""Road and lane geometry: pure functions of the track size."""

from __future__ import annotations

from dataclasses import dataclass

from roadrush.engine.tuning import (
    CAR_BOTTOM_PAD,
    CAR_HEIGHT_RATIO,
    CAR_HEIGHT_SCALE,
    CAR_MAX_H,
    CAR_MAX_W,
    CAR_VERTICAL_OFFSET,
    CAR_WIDTH_RATIO,
    LANE_COUNT,
    ROAD_MARGIN,
    ROAD_WIDTH_RATIO,
)


@dataclass(frozen=True)
class LaneLayout:
    road_width: float
    road_left: float
    lane_width: float
    centers: tuple[float, ...]

    @property
    def lane_count(self) -> int:
        return len(self.centers)

    @property
    def road_right(self) -> float:
        return self.road_left + self.lane_width * self.lane_count

    def lane_left(self, lane: int) -> float:
        return self.road_left + lane * self.lane_width

    def player_bounds(self, player_w: float, margin: float = ROAD_MARGIN) -> tuple[float, float]:
        """Return the (min_x, max_x) range allowed for the player's left edge."""
        return self.road_left + margin, self.road_right - margin - player_w


def lane_layout(width: float, lane_count: int = LANE_COUNT) -> LaneLayout:
    """Split a centred road (70% of the track width) into equal lanes."""
    road_width = width * ROAD_WIDTH_RATIO
    road_left = (width - road_width) / 2
    lane_width = road_width / lane_count
    centers = tuple(road_left + i * lane_width + lane_width / 2 for i in range(lane_count))
    return LaneLayout(road_width=road_width, road_left=road_left, lane_width=lane_width, centers=centers)


@dataclass(frozen=True)
class Track:
    width: float
    height: float
    lane_count: int = LANE_COUNT

    @property
    def lanes(self) -> LaneLayout:
        return lane_layout(self.width, self.lane_count)

    def player_size(self) -> tuple[float, float]:
        w = min(CAR_MAX_W, self.width * CAR_WIDTH_RATIO)
        h = min(CAR_MAX_H, self.height * CAR_HEIGHT_RATIO) * CAR_HEIGHT_SCALE
        return w, h

    def player_origin(self) -> tuple[float, float]:
        """Top-left corner of a freshly reset player: centred, near the bottom."""
        w, h = self.player_size()
        return (self.width - w) / 2, self.height - h - CAR_BOTTOM_PAD - CAR_VERTICAL_OFFSET
